"""
Tests for the function catalogue namespace.
"""

import pytest

import matop
from matop import FUNCTION_NAMES, Config, MathFunctions, TypedFunction, create


class TestMathFunctions:
    """Test MathFunctions."""

    def test_every_name_is_built(self, fns):
        """Test attribute, item and iteration access agree."""
        assert set(fns) == set(FUNCTION_NAMES)
        for name in FUNCTION_NAMES:
            assert name in fns
            assert fns[name] is getattr(fns, name)
            assert isinstance(fns[name], TypedFunction)

    def test_unknown_function(self, fns):
        with pytest.raises(KeyError, match='Unknown function'):
            fns['nope']
        assert 'nope' not in fns

    def test_typed_names(self, fns):
        """Test functions carry their operation names."""
        assert fns.add.name == 'add'
        assert fns.logical_and.name == 'and'
        assert fns.larger_eq.name == 'largerEq'
        assert fns.right_log_shift.name == 'rightLogShift'

    def test_config(self):
        """Test the configuration is kept."""
        config = Config()
        fns = MathFunctions(config)
        assert fns.config is config
        assert fns.context.config is config
        assert repr(fns).startswith('MathFunctions(')

    def test_create(self):
        assert isinstance(create(), MathFunctions)


class TestPackageLevel:
    """Test functions exported by the package."""

    def test_exported(self):
        for name in FUNCTION_NAMES:
            assert isinstance(getattr(matop, name), TypedFunction)
            assert name in matop.__all__

    def test_default_functions(self):
        """Test the package functions work without a namespace."""
        assert matop.add(1, 2) == 3
        a = matop.sparse([[1, 0], [0, 2]])
        b = matop.matrix([[0, 3], [0, 4]], 'sparse')
        assert matop.add(a, b).to_list() == [[1, 3], [0, 6]]
