from pytest import fixture

from yard.registry import Registry


@fixture
def registry():
    return Registry.default()


@fixture
def macro_registry():
    return Registry.default_with_macros()


@fixture
def binary_registry():
    '''
    Binary operators only: no unary plus or minus to fall back on.
    '''
    return Registry(binary_operators=Registry.default().binary_operators)


@fixture
def variables():
    return {'a': 1.0, 'b': 2.0, 'c': 3.0}
