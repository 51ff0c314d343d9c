import io
import json

INDENT = '\t'
SCORE_FORMAT = '{:.8f}'


def indent(f, level):
    f.write(INDENT * level)


def quote(f, text):
    f.write(json.dumps(text, ensure_ascii=False))


def write_items(f, items, write_value, level, open_char, close_char):
    """Write `items` as a bracketed block, one item per line.

    `write_value(f, item, level)` writes a single item, already indented.
    """
    f.write(open_char)
    f.write('\n')
    first = True
    for item in items:
        if not first:
            f.write(',\n')
        first = False
        indent(f, level + 1)
        write_value(f, item, level + 1)
    if not first:
        f.write('\n')
    indent(f, level)
    f.write(close_char)


def write_array(f, elements, level=0):
    write_items(f, elements, lambda f, e, _: f.write(str(e)), level, '[', ']')


def write_object(f, elements: dict, write_value, level=0):
    def write_entry(f, key, level):
        quote(f, key)
        f.write(': ')
        write_value(f, elements[key], level)
    write_items(f, sorted(elements), write_entry, level, '{', '}')


def write_counts_object(f, counts: dict, level=0):
    write_object(f, counts, lambda f, count, _: f.write(str(count)), level)


def write_nested_object(f, locations: dict, level=0):
    write_object(f, locations, lambda f, positions, level: write_array(f, sorted(positions), level), level)


def write_index_object(f, index: dict, level=0):
    write_object(f, index, write_nested_object, level)


def write_search_result(f, result, level):
    f.write('{\n')
    indent(f, level + 1)
    quote(f, 'where')
    f.write(': ')
    quote(f, result.where)
    f.write(',\n')
    indent(f, level + 1)
    quote(f, 'count')
    f.write(': ')
    f.write(str(result.count))
    f.write(',\n')
    indent(f, level + 1)
    quote(f, 'score')
    f.write(': ')
    f.write(SCORE_FORMAT.format(result.score))
    f.write('\n')
    indent(f, level)
    f.write('}')


def write_results_object(f, results: dict, level=0):
    # result lists are already in ranking order
    write_object(f, results, lambda f, rs, level: write_items(f, rs, write_search_result, level, '[', ']'), level)


def to_string(write, elements) -> str:
    f = io.StringIO()
    write(f, elements)
    return f.getvalue()


def to_file(write, elements, path):
    with open(path, 'w', encoding='utf-8') as f:
        write(f, elements)


def index_to_string(index: dict) -> str:
    return to_string(write_index_object, index)


def counts_to_string(counts: dict) -> str:
    return to_string(write_counts_object, counts)


def results_to_string(results: dict) -> str:
    return to_string(write_results_object, results)


def write_index(index: dict, path):
    to_file(write_index_object, index, path)


def write_counts(counts: dict, path):
    to_file(write_counts_object, counts, path)


def write_results(results: dict, path):
    to_file(write_results_object, results, path)
