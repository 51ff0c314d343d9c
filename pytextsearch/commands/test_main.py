import json
import os

import pytest

from .main import DEFAULT_NUM_THREADS, arg_parser, main, num_threads


@pytest.fixture
def corpus(tmp_path) -> str:
    docs = tmp_path / 'docs'
    docs.mkdir()
    (docs / 'a.txt').write_text('fox fox\n', encoding='utf-8')
    (docs / 'b.txt').write_text('fox box\n', encoding='utf-8')
    (tmp_path / 'queries.txt').write_text('fox\nbox fox\nfox box\nfo\n', encoding='utf-8')
    yield str(tmp_path)


@pytest.mark.parametrize('value, expected', [
    ('3', 3),
    ('', DEFAULT_NUM_THREADS),
    ('0', DEFAULT_NUM_THREADS),
    ('-2', DEFAULT_NUM_THREADS),
    ('many', DEFAULT_NUM_THREADS),
])
def test_num_threads(value, expected):
    assert num_threads(value) == expected


def test_arg_defaults():
    args = arg_parser().parse_args(['-threads', '-index', '-counts', '-results', '-path', 'docs'])
    assert args.threads == ''
    assert args.index == 'index.json'
    assert args.counts == 'counts.json'
    assert args.results == 'results.json'
    assert args.path == 'docs'
    assert not args.exact


def test_arg_negative_threads():
    args = arg_parser().parse_args(['-threads', '-1', '-exact'])
    assert args.threads == '-1'
    assert args.exact


@pytest.mark.parametrize('threads', [[], ['-threads', '2']])
def test_main(corpus, threads):
    docs = os.path.join(corpus, 'docs')
    out = os.path.join(corpus, 'out')
    os.mkdir(out)
    assert main(threads + [
        '-path', docs,
        '-index', os.path.join(out, 'index.json'),
        '-counts', os.path.join(out, 'counts.json'),
        '-query', os.path.join(corpus, 'queries.txt'),
        '-exact',
        '-results', os.path.join(out, 'results.json'),
    ]) == 0
    a = os.path.join(docs, 'a.txt')
    b = os.path.join(docs, 'b.txt')
    with open(os.path.join(out, 'index.json'), encoding='utf-8') as f:
        assert json.load(f) == {'box': {b: [2]}, 'fox': {a: [1, 2], b: [1]}}
    with open(os.path.join(out, 'counts.json'), encoding='utf-8') as f:
        assert json.load(f) == {a: 2, b: 2}
    with open(os.path.join(out, 'results.json'), encoding='utf-8') as f:
        results = json.load(f)
    assert list(results) == ['box fox', 'fo', 'fox']
    assert results['fox'] == [
        {'where': a, 'count': 2, 'score': 1.0},
        {'where': b, 'count': 1, 'score': 0.5},
    ]
    assert results['fo'] == []


def test_main_default_output_names(corpus, monkeypatch):
    monkeypatch.chdir(corpus)
    assert main(['-path', 'docs', '-index', '-counts', '-query', 'queries.txt', '-results']) == 0
    for name in ('index.json', 'counts.json', 'results.json'):
        assert os.path.isfile(os.path.join(corpus, name))
    with open(os.path.join(corpus, 'results.json'), encoding='utf-8') as f:
        assert len(json.load(f)['fo']) == 2


def test_main_without_path(corpus, monkeypatch, caplog):
    monkeypatch.chdir(corpus)
    assert main(['-counts']) == 0
    assert 'the -path argument is required' in caplog.text
    with open(os.path.join(corpus, 'counts.json'), encoding='utf-8') as f:
        assert f.read() == '{\n}'


def test_main_unwritable_output(corpus, caplog):
    missing = os.path.join(corpus, 'missing', 'index.json')
    counts = os.path.join(corpus, 'counts.json')
    assert main(['-path', os.path.join(corpus, 'docs'), '-index', missing, '-counts', counts]) == 0
    assert 'unable to write the inverted index' in caplog.text
    assert os.path.isfile(counts)


@pytest.mark.parametrize('threads', [[], ['-threads', '2']])
def test_main_missing_path(corpus, monkeypatch, caplog, threads):
    monkeypatch.chdir(corpus)
    assert main(threads + ['-path', os.path.join(corpus, 'nope'), '-index']) == 0
    assert 'unable to build the inverted index' in caplog.text
    with open(os.path.join(corpus, 'index.json'), encoding='utf-8') as f:
        assert f.read() == '{\n}'
