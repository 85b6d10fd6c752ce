import pytest

from shape_packer.shape import Shape


@pytest.fixture
def full():
    return Shape.from_rows(['###', '###', '###'])


@pytest.fixture
def corner():
    return Shape.from_rows(['##.', '#..', '...'])


@pytest.fixture
def hook():
    return Shape.from_rows(['.#.', '##.', '...'])


@pytest.fixture
def plus():
    return Shape.from_rows(['.#.', '###', '.#.'])
