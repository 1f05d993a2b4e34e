from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Optional, TypeAlias

from tagml import abstract_syntax as ast, catalogue
from tagml.bindings import Bindings
from tagml.generalization import generalize, instantiate, instantiate_tag
from tagml.type_impls import (
    Type,
    TypeVar,
    TypeScheme,
    Tag,
    FuncType,
    IntType,
    DoubleType,
    StringType,
    CharType,
    UnitType,
    BoolType,
    TypeCheckError,
    zonk,
)
from tagml.type_parser import parse_scheme
from tagml.unify import unify

logger = logging.getLogger(__name__)

TEnv: TypeAlias = Bindings[TypeScheme]


@dataclasses.dataclass
class UnboundError(TypeCheckError):
    var: str

    def __str__(self):
        return f"variable {self.var} is not defined"


@dataclasses.dataclass
class UndefinedTag(TypeCheckError):
    name: str

    def __str__(self):
        return f"tag {self.name} is not defined"


@dataclasses.dataclass
class TagArityMismatch(TypeCheckError):
    name: str
    expected: int
    actual: int

    def __str__(self):
        return f"tag {self.name} takes {self.expected} argument(s) but {self.actual} were given"


PRELUDE = {
    "__operator_pls": "Int -> Int -> Int",
    "__operator_mns": "Int -> Int -> Int",
    "__operator_ast": "Int -> Int -> Int",
    "__operator_sls": "Int -> Int -> Int",
}


@dataclasses.dataclass
class Context:
    env: TEnv = dataclasses.field(default_factory=Bindings)
    type_arities: Bindings[int] = dataclasses.field(default_factory=Bindings)
    tags: Bindings[Tag] = dataclasses.field(default_factory=Bindings)

    @staticmethod
    def empty() -> Context:
        return Context()

    @staticmethod
    def default() -> Context:
        env = Bindings()
        for name, signature in PRELUDE.items():
            env = env.extend(name, parse_scheme(signature))
        return Context(env=env)

    def extend_env(self, var: str, scheme: TypeScheme) -> Context:
        return Context(self.env.extend(var, scheme), self.type_arities, self.tags)

    def extend_types(self, arities: Bindings[int], tags: Bindings[Tag]) -> Context:
        return Context(
            self.env, arities.append(self.type_arities), tags.append(self.tags)
        )

    def lookup_tag(self, name: str) -> Tag:
        try:
            return self.tags.get(name)
        except LookupError:
            raise UndefinedTag(name) from None

    def __str__(self):
        lines = ["types:"]
        lines += [f"  {name}/{arity}" for name, arity in self.type_arities.items()]
        lines.append("tags:")
        lines += [f"  {tag}" for tag in self.tags.values()]
        lines.append("env:")
        lines += [f"  {var} : {scheme}" for var, scheme in self.env.items()]
        return "\n".join(lines)


def infer(expr: ast.Expression, ty: Type, env: TEnv, ctx: Context):
    """Check expr against the expected type ty.

    ty may be (or contain) unbound variables; inference binds them.
    """
    match expr:
        case ast.Literal(bool()):
            unify(ty, BoolType())
        case ast.Literal(int()):
            unify(ty, IntType())
        case ast.Literal(float()):
            unify(ty, DoubleType())
        case ast.Literal(str()):
            unify(ty, StringType())
        case ast.Literal(None):
            unify(ty, UnitType())
        case ast.Char():
            unify(ty, CharType())
        case ast.TagExpr(name, args):
            tag = instantiate_tag(ctx.lookup_tag(name))
            expr.index = tag.index
            if len(args) != tag.arity:
                raise TagArityMismatch(name, tag.arity, len(args))
            for arg, arg_type in zip(args, tag.arg_types):
                infer(arg, arg_type, env, ctx)
            unify(ty, tag.result_type)
        case ast.Reference(var):
            scheme = env.lookup(var)
            if scheme is None:
                raise UnboundError(var)
            t = instantiate(scheme)
            unify(expr.type, t)
            unify(ty, t)
        case ast.Function(var, body, arg_type):
            ret_type = TypeVar()
            infer(body, ret_type, env.extend(var, TypeScheme.mono(arg_type)), ctx)
            unify(ty, FuncType(arg_type, ret_type))
        case ast.Application(fun, arg):
            arg_type = TypeVar()
            infer(fun, FuncType(arg_type, ty), env, ctx)
            infer(arg, arg_type, env, ctx)
        case ast.Conditional(condition, consequence, alternative):
            infer(condition, BoolType(), env, ctx)
            infer(consequence, ty, env, ctx)
            infer(alternative, ty, env, ctx)
        case ast.Match(scrutinee, pat, consequence, alternative):
            t = TypeVar()
            pat_env = infer_pat(pat, t, env, ctx)
            infer(scrutinee, t, env, ctx)
            infer(consequence, ty, pat_env.append(env), ctx)
            infer(alternative, ty, env, ctx)
        case ast.Let(var, val, body):
            t = TypeVar()
            infer(val, t, env, ctx)
            infer(body, ty, env.extend(var, generalize(env, t)), ctx)
        case _:
            raise NotImplementedError(expr)


def infer_pat(pat: ast.Pattern, ty: Type, env: TEnv, ctx: Context) -> TEnv:
    """Unify the pattern with the scrutinee type and return the bindings it introduces."""
    match pat:
        case ast.WildcardPattern():
            unify(ty, pat.type)
            return Bindings()
        case ast.BindingPattern(var):
            unify(ty, pat.type)
            return Bindings().extend(var, TypeScheme.mono(ty))
        case _:
            raise NotImplementedError(pat)


def check_toplevel(item: ast.ToplevelItem, ctx: Context) -> Context:
    match item:
        case ast.TypeDefinition():
            return ctx.extend_types(catalogue.build_arities(item), catalogue.build_tags(item))
        case ast.ToplevelDo(expr):
            infer(expr, item.type, ctx.env, ctx)
            fill_type_slots(item)
            return ctx
        case _:
            raise NotImplementedError(item)


def fill_type_slots(node):
    """Replace the type variables stored in the AST by the types they are bound to."""
    match node:
        case ast.AstNode():
            for field in dataclasses.fields(node):
                value = getattr(node, field.name)
                if isinstance(value, Type):
                    setattr(node, field.name, zonk(value))
                else:
                    fill_type_slots(value)
        case list():
            for x in node:
                fill_type_slots(x)


class TypeChecker:
    def __init__(self, ctx: Optional[Context] = None, report: Callable = print):
        self.ctx = Context.default() if ctx is None else ctx
        self.report = report

    def check_script(self, script: ast.Script, keep_going: bool = False) -> list[TypeCheckError]:
        """Check all top-level items in order.

        Each failing item is skipped if keep_going is set; otherwise the first
        error is raised. Returns the errors of skipped items.
        """
        errors = []
        for item in script.statements:
            logger.debug("checking %s", item)
            try:
                self.ctx = check_toplevel(item, self.ctx)
            except TypeCheckError as e:
                logger.info("%s: %s", item, e)
                if not keep_going:
                    raise
                errors.append(e)
                continue

            match item:
                case ast.TypeDefinition():
                    self.report(self.ctx)
                case ast.ToplevelDo(expr, ty):
                    self.report(f"{expr} : {ty}")
        return errors
