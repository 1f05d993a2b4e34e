from tagml.bindings import Bindings
from tagml.generalization import free_type_vars, generalize, instantiate, instantiate_tag
from tagml.type_impls import TypeVar, TypeScheme, Tag, FuncType, UserType, IntType, BoolType, zonk
from tagml.unify import unify


def test_free_vars_of_type():
    a, b = TypeVar(), TypeVar()
    assert free_type_vars(FuncType(a, UserType("Pair", [b, IntType()]))) == {a.id, b.id}
    assert free_type_vars(IntType()) == set()


def test_free_vars_skip_bound_variables():
    a, b = TypeVar(), TypeVar()
    unify(a, FuncType(b, IntType()))
    assert free_type_vars(a) == {b.id}
    unify(b, BoolType())
    assert free_type_vars(a) == set()


def test_free_vars_of_scheme_exclude_bounded():
    a, b = TypeVar(), TypeVar()
    scheme = TypeScheme(frozenset([a.id]), FuncType(a, b))
    assert free_type_vars(scheme) == {b.id}


def test_free_vars_of_env():
    a, b, c = TypeVar(), TypeVar(), TypeVar()
    env = (
        Bindings()
        .extend("f", TypeScheme(frozenset([a.id]), FuncType(a, b)))
        .extend("x", TypeScheme.mono(c))
    )
    assert free_type_vars(env) == {b.id, c.id}


def test_generalize_excludes_env_vars():
    a, b = TypeVar(), TypeVar()
    env = Bindings().extend("x", TypeScheme.mono(a))
    scheme = generalize(env, FuncType(a, b))
    assert scheme.bounded == {b.id}


def test_instantiate_monomorphic_scheme():
    a = TypeVar()
    assert instantiate(TypeScheme.mono(a)) is a


def test_instantiate_is_fresh():
    a, b = TypeVar(), TypeVar()
    scheme = TypeScheme(frozenset([a.id]), FuncType(a, b))

    t1 = instantiate(scheme)
    t2 = instantiate(scheme)

    assert t1.arg != t2.arg
    assert t1.arg.id not in (a.id, t2.arg.id)
    # unbound, foreign variables are shared
    assert t1.ret is b and t2.ret is b

    unify(t1.arg, IntType())
    assert t2.arg.is_fresh()
    assert a.is_fresh()


def test_instantiate_resolves_bindings_first():
    a, b = TypeVar(), TypeVar()
    unify(b, UserType("List", [a]))
    t = instantiate(TypeScheme(frozenset([a.id]), FuncType(a, b)))
    assert zonk(t).ret == UserType("List", [t.arg])


def test_instantiate_tag():
    a = TypeVar()
    tag = Tag("Cons", 1, frozenset([a.id]), (a, UserType("List", [a])), UserType("List", [a]))

    t1 = instantiate_tag(tag)
    t2 = instantiate_tag(tag)

    assert (t1.name, t1.index, t1.arity) == ("Cons", 1, 2)
    x = t1.arg_types[0]
    assert x != t2.arg_types[0]
    assert t1.arg_types[1] == UserType("List", [x])
    assert t1.result_type == UserType("List", [x])
