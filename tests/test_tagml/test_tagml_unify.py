import pytest

from tagml.type_impls import TypeVar, FuncType, UserType, IntType, BoolType, DoubleType, zonk
from tagml.unify import unify, occurs, OccursViolation, UnificationFailure


def test_occurs_self_var():
    v = TypeVar()
    assert occurs(v.id, v)


def test_not_occurs_different_var():
    assert not occurs(TypeVar().id, TypeVar())


def test_occurs_in_structure():
    v = TypeVar()
    assert occurs(v.id, FuncType(IntType(), UserType("List", [v])))
    assert not occurs(v.id, FuncType(IntType(), UserType("List", [IntType()])))


def test_occurs_through_binding():
    v, w = TypeVar(), TypeVar()
    w.set_type(UserType("List", [v]))
    assert occurs(v.id, FuncType(w, IntType()))


def test_unify_var_with_primitive():
    v = TypeVar()
    unify(v, IntType())
    assert v.resolve() == IntType()


def test_unify_two_vars():
    v1, v2 = TypeVar(), TypeVar()
    unify(v1, v2)
    assert v1.resolve() is v2.resolve()


def test_unify_same_var_binds_nothing():
    v = TypeVar()
    unify(v, v)
    assert v.is_fresh()


def test_unify_var_with_var_bound_to_it():
    v, w = TypeVar(), TypeVar()
    unify(w, v)
    unify(v, w)
    unify(w, v)
    assert v.resolve() is w.resolve()


def test_unify_functions():
    a, b = TypeVar(), TypeVar()
    unify(FuncType(a, BoolType()), FuncType(IntType(), b))
    assert zonk(FuncType(a, b)) == FuncType(IntType(), BoolType())


def test_unify_user_types():
    a = TypeVar()
    unify(UserType("List", [a]), UserType("List", [DoubleType()]))
    assert a.resolve() == DoubleType()


@pytest.mark.parametrize(
    "left, right",
    [
        (IntType(), BoolType()),
        (IntType(), FuncType(IntType(), IntType())),
        (UserType("List", []), UserType("Tree", [])),
        (UserType("List", [IntType()]), UserType("List", [])),
        (UserType("List", [IntType()]), UserType("List", [BoolType()])),
        (FuncType(IntType(), IntType()), FuncType(IntType(), BoolType())),
    ],
)
def test_unification_failure(left, right):
    with pytest.raises(UnificationFailure):
        unify(left, right)
    with pytest.raises(UnificationFailure):
        unify(right, left)


@pytest.mark.parametrize(
    "make",
    [
        lambda v: FuncType(v, IntType()),
        lambda v: FuncType(IntType(), FuncType(BoolType(), v)),
        lambda v: UserType("List", [v]),
        lambda v: UserType("Pair", [IntType(), UserType("List", [v])]),
    ],
)
def test_occurs_violation(make):
    v = TypeVar()
    with pytest.raises(OccursViolation):
        unify(v, make(v))
    assert v.is_fresh()

    w = TypeVar()
    with pytest.raises(OccursViolation):
        unify(make(w), w)
    assert w.is_fresh()


def test_occurs_violation_through_alias():
    v, w = TypeVar(), TypeVar()
    unify(w, v)
    with pytest.raises(OccursViolation):
        unify(v, UserType("List", [w]))


def test_unify_is_symmetric():
    a1, b1 = TypeVar(), TypeVar()
    unify(FuncType(a1, IntType()), FuncType(BoolType(), b1))

    a2, b2 = TypeVar(), TypeVar()
    unify(FuncType(BoolType(), b2), FuncType(a2, IntType()))

    assert zonk(FuncType(a1, b1)) == zonk(FuncType(a2, b2)) == FuncType(BoolType(), IntType())


def test_bound_variable_is_never_rebound():
    v = TypeVar()
    unify(v, IntType())
    with pytest.raises(RuntimeError):
        v.set_type(BoolType())
    with pytest.raises(UnificationFailure):
        unify(v, BoolType())
    assert v.resolve() == IntType()


def test_resolution_is_idempotent():
    v = TypeVar()
    unify(v, FuncType(IntType(), BoolType()))
    t = v.resolve()
    assert t.resolve() is t
    assert IntType().resolve() == IntType()
