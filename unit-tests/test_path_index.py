#!/usr/bin/env python3

"""Tests for daps.storage.path_index."""

import random

import pytest

from daps.storage import PathIndex, join_path, split_path


def parent_of(path):
    pos = path.rfind('/')
    return path[:pos] if pos > 0 else '/'


def assert_parents_present(index):
    assert '/' in index
    for path in index.paths():
        if path != '/':
            assert parent_of(path) in index, path


def test_insert_registers_every_level():
    index = PathIndex()
    index.insert('/prod/app/db/password')

    assert index.children('/') == ['prod']
    assert index.children('/prod') == ['app']
    assert index.children('/prod/app') == ['db']
    assert index.children('/prod/app/db') == ['password']
    assert index.children('/prod/app/db/password') == []
    assert '/prod/app/db/password' in index


def test_children_of_unknown_path_is_empty():
    index = PathIndex()
    index.insert('/prod/app')
    assert index.children('/nope') == []
    assert index.children('prod') == []


def test_children_keep_insertion_order():
    index = PathIndex()
    for path in ('/b/x', '/a/y', '/b/z', '/c'):
        index.insert(path)
    assert index.children('/') == ['b', 'a', 'c']
    assert index.children('/b') == ['x', 'z']


def test_repeated_insert_does_not_duplicate_children():
    index = PathIndex()
    index.insert('/prod/app/db/password')
    index.insert('/prod/app/db/password')
    index.insert('/prod/app/db/user')
    assert index.children('/prod/app/db') == ['password', 'user']
    assert index.children('/prod') == ['app']


def test_empty_segments_are_ignored():
    index = PathIndex()
    index.insert('//prod///app/')
    assert index.children('/') == ['prod']
    assert index.children('/prod') == ['app']
    assert len(index) == 3


def test_root_is_present_in_empty_index():
    index = PathIndex()
    assert '/' in index
    assert index.children('/') == []
    index.clear()
    assert '/' in index


def test_load_entries_rebuilds_tree():
    source = PathIndex()
    source.insert_all(['/prod/app/db/password', '/prod/app/url', '/dev/x'])

    rebuilt = PathIndex()
    rebuilt.load_entries(source.entries())

    assert dict(rebuilt.entries()) == dict(source.entries())


@pytest.mark.parametrize('seed', range(5))
def test_parents_present_after_random_inserts(seed):
    rnd = random.Random(seed)
    segments = ['prod', 'dev', 'app', 'db', 'Web', 'x', 'y']
    index = PathIndex()
    for _ in range(200):
        depth = rnd.randint(0, 6)
        path = '/' + '/'.join(rnd.choice(segments) for _ in range(depth))
        index.insert(path)
        assert_parents_present(index)

    for path, children in index.entries():
        assert len(children) == len(set(children))
        for child in children:
            assert join_path(path, child) in index


@pytest.mark.parametrize('path, expected', [
    ('/', []),
    ('/a/b', ['a', 'b']),
    ('a//b/', ['a', 'b']),
])
def test_split_path(path, expected):
    assert split_path(path) == expected


def test_join_path():
    assert join_path('/', 'prod') == '/prod'
    assert join_path('/prod', 'app') == '/prod/app'
    assert join_path('/prod/', 'app') == '/prod/app'
