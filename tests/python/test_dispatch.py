"""
Tests for typed functions and signature parsing.
"""

import pytest
from decimal import Decimal
from fractions import Fraction

from matop import (
    AmbiguousSignature,
    DenseMatrix,
    Kind,
    NoMatchingSignature,
    SignatureError,
    SparseMatrix,
    kind_of,
    refer_to,
    refer_to_self,
    typed,
)
from matop.dispatch import is_typed_function, parse_signature, specialize


class TestKindOf:
    """Test runtime classification."""

    def test_scalars(self):
        """Test scalar kinds."""
        assert kind_of(1) is Kind.NUMBER
        assert kind_of(1.5) is Kind.NUMBER
        assert kind_of(True) is Kind.BOOLEAN
        assert kind_of(Decimal('1.5')) is Kind.BIGNUMBER
        assert kind_of(Fraction(1, 3)) is Kind.FRACTION
        assert kind_of(1 + 2j) is Kind.COMPLEX
        assert kind_of('x') is Kind.STRING
        assert kind_of(None) is Kind.NULL

    def test_collections(self):
        """Test array and matrix kinds."""
        assert kind_of([[1, 2]]) is Kind.ARRAY
        assert kind_of((1, 2)) is Kind.ARRAY
        assert kind_of(DenseMatrix([[1]])) is Kind.DENSE_MATRIX
        assert kind_of(SparseMatrix.from_dense([[1]])) is Kind.SPARSE_MATRIX

    def test_numpy_scalars(self):
        """Test numpy scalars classify like Python numbers."""
        import numpy as np
        assert kind_of(np.float64(1.0)) is Kind.NUMBER
        assert kind_of(np.int32(3)) is Kind.NUMBER
        assert kind_of(np.bool_(True)) is Kind.BOOLEAN

    def test_unknown_object(self):
        """Test unknown classes fall back to Object."""
        assert kind_of(object()) is Kind.OBJECT


class TestParseSignature:
    """Test signature parsing."""

    def test_union_and_any(self):
        """Test unions, any and canonical printing."""
        sig = parse_signature('BigNumber | number, any')
        assert str(sig) == 'number | BigNumber, any'
        assert sig.rank == (0, 1, 1)

    def test_alias(self):
        """Test the Matrix alias."""
        sig = parse_signature('Matrix')
        assert sig.params[0].kinds == frozenset({Kind.DENSE_MATRIX, Kind.SPARSE_MATRIX})

    def test_variadic(self):
        """Test a trailing variadic parameter."""
        sig = parse_signature('number, ...number')
        assert sig.variadic
        assert sig.matches((Kind.NUMBER, Kind.NUMBER, Kind.NUMBER))
        assert not sig.matches((Kind.NUMBER,))

    def test_unknown_type(self):
        """Test unknown type names are rejected."""
        with pytest.raises(SignatureError):
            parse_signature('number, Quaternion')

    def test_misplaced_variadic(self):
        """Test only the last parameter may be variadic."""
        with pytest.raises(SignatureError):
            parse_signature('...number, number')

    def test_empty_parameter(self):
        """Test empty parameters are rejected."""
        with pytest.raises(SignatureError):
            parse_signature('number, , number')


class TestTypedFunction:
    """Test dispatch."""

    def test_exact_beats_any(self):
        """Test the most specific signature wins."""
        f = typed('f', {
            'number, number': lambda x, y: 'numbers',
            'any, any': lambda x, y: 'fallback',
        })
        assert f(1, 2) == 'numbers'
        assert f('a', 2) == 'fallback'

    def test_exact_beats_union(self):
        """Test a single type beats a union."""
        f = typed('f', {
            'number': lambda x: 'number',
            'number | BigNumber': lambda x: 'union',
        })
        assert f(1) == 'number'
        assert f(Decimal(1)) == 'union'

    def test_no_match(self):
        """Test calls without a matching signature."""
        f = typed('f', {'number': lambda x: x})
        with pytest.raises(NoMatchingSignature) as info:
            f('x')
        assert 'Unexpected type of argument in function f' in str(info.value)
        assert 'actual: (string)' in str(info.value)
        assert info.value.arity == 1

    def test_no_match_is_type_error(self):
        """Test dispatch errors are TypeErrors."""
        f = typed('f', {'number': lambda x: x})
        with pytest.raises(TypeError):
            f(1, 2)

    def test_ambiguous(self):
        """Test equally specific signatures are reported."""
        f = typed('f', {
            'number, any': lambda x, y: 1,
            'any, number': lambda x, y: 2,
        })
        with pytest.raises(AmbiguousSignature):
            f(1, 2)
        assert f(1, 'a') == 1
        assert f('a', 1) == 2

    def test_variadic(self):
        """Test n-ary reduction through refer_to_self."""
        add = typed('add', {
            'number, number': lambda x, y: x + y,
            'any, any, ...any': refer_to_self(
                lambda self: lambda x, y, *rest: self(self(x, y), *rest) if rest else self(x, y)),
        })
        assert add(1, 2) == 3
        assert add(1, 2, 3, 4) == 10

    def test_refer_to(self):
        """Test delegation to another implementation."""
        f = typed('f', {
            'number': lambda x: x * 2,
            'string': refer_to('number', builder=lambda double: lambda s: double(len(s))),
        })
        assert f('abc') == 6

    def test_refer_to_unknown(self):
        """Test references to missing signatures fail at construction."""
        with pytest.raises(SignatureError):
            typed('f', {'string': refer_to('number', builder=lambda impl: impl)})

    def test_circular_reference(self):
        """Test reference cycles are detected."""
        with pytest.raises(SignatureError, match='Circular'):
            typed('f', {
                'number': refer_to('string', builder=lambda impl: impl),
                'string': refer_to('number', builder=lambda impl: impl),
            })

    def test_duplicate_signature(self):
        """Test merging tables with conflicting implementations."""
        first = {'number': lambda x: 1}
        second = {'number': lambda x: 2}
        with pytest.raises(SignatureError):
            typed('f', first, second)

    def test_merge_typed_function(self):
        """Test a typed function's signatures can be merged into another."""
        base = typed('base', {'number': lambda x: 'n'})
        f = typed('f', base, {'string': lambda x: 's'})
        assert f(1) == 'n'
        assert f('a') == 's'
        assert is_typed_function(f)

    def test_signatures_read_only(self):
        """Test the signature mapping cannot be modified."""
        f = typed('f', {'number': lambda x: x})
        assert list(f.signatures) == ['number']
        with pytest.raises(TypeError):
            f.signatures['string'] = lambda x: x

    def test_find(self):
        """Test finding implementations by pattern or by types."""
        impl = lambda x, y: x
        f = typed('f', {'number | BigNumber, number': impl})
        assert f.find('number | BigNumber, number') is impl
        assert f.find(('BigNumber', 'number')) is impl
        with pytest.raises(NoMatchingSignature):
            f.find(('string', 'number'))

    def test_resolution_is_cached(self):
        """Test resolved implementations are reused."""
        f = typed('f', {'any': lambda x: x})
        f(1)
        assert f._cache[(Kind.NUMBER,)] is f.signatures['any']


class TestSpecialize:
    """Test kernel narrowing."""

    def test_specialize_typed(self):
        """Test narrowing returns the datatype's implementation."""
        impl = lambda x, y: x + y
        f = typed('f', {'number, number': impl, 'any, any': lambda x, y: None})
        assert specialize(f, 'number') is impl

    def test_specialize_falls_back(self):
        """Test narrowing keeps the kernel when nothing matches."""
        f = typed('f', {'number, number': lambda x, y: x})
        assert specialize(f, 'Fraction') is f
        assert specialize(f, None) is f

    def test_specialize_plain_function(self):
        """Test plain callables are returned unchanged."""
        fn = lambda x, y: x
        assert specialize(fn, 'number') is fn
