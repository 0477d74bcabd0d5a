import threading
from unittest import TestCase

from daps.cache import ParameterCache
from daps.storage import PathIndex


class TestParameterCache(TestCase):
    def test_put_registers_path_and_value(self):
        cache = ParameterCache()
        self.assertTrue(cache.put('/prod/app/url', 'https://example.com'))
        self.assertFalse(cache.put('/prod/app/url', 'https://example.org'))
        self.assertEqual(cache.get_value('/prod/app/url'), 'https://example.org')
        self.assertEqual(cache.children('/prod/app'), ['url'])
        self.assertIsNone(cache.get_value('/prod/app'))

    def test_search(self):
        cache = ParameterCache()
        for path in ('/prod/web/Token', '/prod/app/token', '/prod/app/url'):
            cache.put(path, 'x')
        self.assertEqual(cache.search('TOKEN'), ['/prod/app/token', '/prod/web/Token'])
        self.assertEqual(cache.search(''), ['/prod/app/token', '/prod/app/url', '/prod/web/Token'])
        self.assertEqual(cache.search('nothing'), [])

    def test_replace(self):
        cache = ParameterCache()
        cache.put('/old', 'x')
        index = PathIndex()
        index.insert('/new/a')
        cache.replace(index, {'/new/a': 'y'})
        self.assertIsNone(cache.get_value('/old'))
        self.assertEqual(cache.children('/'), ['new'])
        self.assertEqual(cache.value_count, 1)

    def test_readers_see_paths_with_values(self):
        cache = ParameterCache()
        stop = threading.Event()
        errors = []

        def reader():
            while not stop.is_set():
                for path, value in cache.values().items():
                    parent, _, name = path.rpartition('/')
                    if name not in cache.children(parent or '/'):
                        errors.append(path)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for i in range(2000):
                cache.put(f'/p/{i % 50}/v{i}', str(i))
        finally:
            stop.set()
            thread.join()
        self.assertEqual(errors, [])
