import re
import unicodedata

from nltk.stem.snowball import SnowballStemmer

STEMMER_LANGUAGE = 'english'

SPACES = re.compile(r'\s+')


def new_stemmer() -> SnowballStemmer:
    return SnowballStemmer(STEMMER_LANGUAGE)


def clean(text: str) -> str:
    # accents are split off by NFD and dropped with the other non-letters
    text = unicodedata.normalize('NFD', text)
    return ''.join(c for c in text if c.isalpha() or c.isspace()).lower()


def split(text: str) -> list[str]:
    return [word for word in SPACES.split(text.strip()) if word]


def parse(line: str) -> list[str]:
    return split(clean(line))


def stems(line: str, stemmer=None) -> list[str]:
    """Stems of every word in the line, in order, duplicates kept."""
    if stemmer is None:
        stemmer = new_stemmer()
    result = []
    for word in parse(line):
        stem = stemmer.stem(word)
        if stem:
            result.append(stem)
    return result


def unique_stems(line: str, stemmer=None) -> list[str]:
    """Sorted, deduplicated stems of the line."""
    return sorted(set(stems(line, stemmer)))


def file_stems(path, stemmer=None) -> list[str]:
    if stemmer is None:
        stemmer = new_stemmer()
    result = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            result.extend(stems(line, stemmer))
    return result


def queries_from_file(path, stemmer=None) -> list[list[str]]:
    if stemmer is None:
        stemmer = new_stemmer()
    queries = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            query = unique_stems(line, stemmer)
            if query:
                queries.append(query)
    return queries
