from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / 'examples'


@pytest.fixture
def example_path():
    def resolve(name: str) -> Path:
        return EXAMPLES_DIR / name
    return resolve


@pytest.fixture
def example_source(example_path):
    def load(name: str) -> str:
        return example_path(name).read_text(encoding='utf-8')
    return load
