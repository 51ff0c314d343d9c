from .inverted_index import SearchResult
from .json_writer import counts_to_string, index_to_string, results_to_string, write_counts


def result(where, count, score):
    r = SearchResult(where)
    r.count = count
    r.score = score
    return r


def test_counts():
    assert counts_to_string({'b.txt': 3, 'a.txt': 10}) == '{\n\t"a.txt": 10,\n\t"b.txt": 3\n}'


def test_empty():
    assert counts_to_string({}) == '{\n}'
    assert index_to_string({}) == '{\n}'
    assert results_to_string({'fox': []}) == '{\n\t"fox": [\n\t]\n}'


def test_index():
    index = {'fox': {'b.txt': {3, 1}, 'a.txt': [2]}}
    assert index_to_string(index) == (
        '{\n'
        '\t"fox": {\n'
        '\t\t"a.txt": [\n'
        '\t\t\t2\n'
        '\t\t],\n'
        '\t\t"b.txt": [\n'
        '\t\t\t1,\n'
        '\t\t\t3\n'
        '\t\t]\n'
        '\t}\n'
        '}'
    )


def test_results():
    results = {
        'fox': [result('a.txt', 2, 1.0), result('b.txt', 1, 1 / 3)],
        'box': [],
    }
    assert results_to_string(results) == (
        '{\n'
        '\t"box": [\n'
        '\t],\n'
        '\t"fox": [\n'
        '\t\t{\n'
        '\t\t\t"where": "a.txt",\n'
        '\t\t\t"count": 2,\n'
        '\t\t\t"score": 1.00000000\n'
        '\t\t},\n'
        '\t\t{\n'
        '\t\t\t"where": "b.txt",\n'
        '\t\t\t"count": 1,\n'
        '\t\t\t"score": 0.33333333\n'
        '\t\t}\n'
        '\t]\n'
        '}'
    )


def test_quotes_escaped():
    assert counts_to_string({'a "b".txt': 1}) == '{\n\t"a \\"b\\".txt": 1\n}'


def test_write_counts(tmp_path):
    path = tmp_path / 'counts.json'
    write_counts({'ä.txt': 1}, path)
    assert path.read_text(encoding='utf-8') == '{\n\t"ä.txt": 1\n}'
