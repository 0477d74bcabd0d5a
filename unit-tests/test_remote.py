from unittest import TestCase

import boto3
from botocore.stub import Stubber

from daps.error import RemoteError
from daps.remote import ParameterStore


class TestParameterStore(TestCase):
    def setUp(self):
        client = boto3.client('ssm', region_name='us-east-1', aws_access_key_id='testing',
                              aws_secret_access_key='testing')
        self.stubber = Stubber(client)
        self.stubber.activate()
        self.addCleanup(self.stubber.deactivate)
        self.store = ParameterStore('us-east-1', client=client)

    def test_get_one(self):
        self.stubber.add_response('get_parameter',
                                  {'Parameter': {'Name': '/prod/a', 'Value': 'v', 'Type': 'SecureString'}},
                                  {'Name': '/prod/a', 'WithDecryption': True})
        param = self.store.get_one('/prod/a')
        self.assertEqual((param.path, param.value, param.type), ('/prod/a', 'v', 'SecureString'))
        self.stubber.assert_no_pending_responses()

    def test_get_one_not_found(self):
        self.stubber.add_client_error('get_parameter', service_error_code='ParameterNotFound')
        self.assertIsNone(self.store.get_one('/prod/missing'))

    def test_get_one_access_denied(self):
        self.stubber.add_client_error('get_parameter', service_error_code='AccessDeniedException',
                                      service_message='not allowed')
        with self.assertRaises(RemoteError) as e:
            self.store.get_one('/prod/a')
        self.assertEqual(e.exception.code, 'AccessDeniedException')
        self.assertEqual(str(e.exception), 'AccessDeniedException: not allowed')

    def test_list_by_prefix(self):
        self.stubber.add_response('get_parameters_by_path',
                                  {'Parameters': [{'Name': '/prod/a', 'Value': '1', 'Type': 'String'}],
                                   'NextToken': 'token-1'},
                                  {'Path': '/prod', 'Recursive': True, 'WithDecryption': True, 'MaxResults': 10})
        self.stubber.add_response('get_parameters_by_path',
                                  {'Parameters': [{'Name': '/prod/b', 'Value': '2', 'Type': 'String'}]},
                                  {'Path': '/prod', 'Recursive': True, 'WithDecryption': True, 'MaxResults': 10,
                                   'NextToken': 'token-1'})

        page = self.store.list_by_prefix('/prod')
        self.assertEqual([x.path for x in page.entries], ['/prod/a'])
        self.assertEqual(page.next_token, 'token-1')

        page = self.store.list_by_prefix('/prod', next_token=page.next_token)
        self.assertEqual([x.value for x in page.entries], ['2'])
        self.assertIsNone(page.next_token)
        self.stubber.assert_no_pending_responses()

    def test_put_one(self):
        self.stubber.add_response('put_parameter', {'Version': 3},
                                  {'Name': '/prod/a', 'Value': 'v', 'Overwrite': True, 'Type': 'String'})
        self.assertEqual(self.store.put_one('/prod/a', 'v', 'String'), 3)

    def test_put_one_error(self):
        self.stubber.add_client_error('put_parameter', service_error_code='ParameterLimitExceeded')
        with self.assertRaises(RemoteError):
            self.store.put_one('/prod/a', 'v', 'String')
