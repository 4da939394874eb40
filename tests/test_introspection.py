"""
Introspection tests for commands, pydantic models, dataclasses and enums
"""

import dataclasses
from enum import Enum
from pathlib import Path
from typing import List, Optional, TypedDict

import pytest
from pydantic import BaseModel, Field

from invokekit import integrate, generate_only, ExportConfiguration
from invokekit.core.errors import CollectionError, TypeFormattingError
from invokekit.core.schema import BaseType, ContainerType, NamedKind
from invokekit.generators import typescript
from invokekit.introspection import (
    command,
    collect_commands,
    try_collect_commands,
    function_to_datatype,
    introspect_class,
)


TESTS_ROOT = str(Path(__file__).resolve().parent)


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclasses.dataclass
class Profile:
    """Public profile details."""
    bio: str
    website: Optional[str] = None


class User(BaseModel):
    """A registered user."""
    id: int
    display_name: str = Field(alias="displayName", description="Name shown in the UI")
    status: UserStatus = UserStatus.ACTIVE
    profile: Optional[Profile] = None


@dataclasses.dataclass
class Node:
    value: int
    children: List["Node"] = dataclasses.field(default_factory=list)


class Settings(TypedDict, total=False):
    theme: str


class Token:
    value: str


@dataclasses.dataclass
class Item:
    label: str


def get_user(user_id: int, include_profile: bool) -> User:
    """
    Fetch a user by id.

    Raises if the user does not exist.
    """


def greet(name: str) -> str:
    pass


def ping():
    pass


# === COMMANDS === #

def test_function_descriptor():
    function = function_to_datatype(get_user)

    assert function.name == "get_user"
    assert [arg_name for arg_name, _ in function.args] == ["user_id", "include_profile"]
    assert function.args[0][1].base_type == BaseType.NUMBER
    assert function.args[1][1].base_type == BaseType.BOOLEAN
    assert function.result.reference == "User"
    assert function.docs == ("Fetch a user by id.", "", "Raises if the user does not exist.")


def test_missing_return_annotation_is_null():
    function = function_to_datatype(ping)
    assert function.args == ()
    assert function.result.base_type == BaseType.NULL
    assert function.docs == ()


def test_command_decorator_renames():
    @command(name="fetch_user")
    def load_user(user_id: int) -> User:
        pass

    @command
    def logout() -> None:
        pass

    assert function_to_datatype(load_user).name == "fetch_user"
    assert function_to_datatype(logout).name == "logout"


def test_missing_parameter_annotation():
    def broken(value) -> str:
        pass

    with pytest.raises(CollectionError, match="Parameter 'value' of command 'broken' has no type annotation"):
        function_to_datatype(broken)


def test_variadic_parameters_are_rejected():
    def spread(*values: int) -> None:
        pass

    with pytest.raises(CollectionError, match="variadic"):
        function_to_datatype(spread)


def test_duplicate_command_names():
    @command(name="greet")
    def greet_again(name: str) -> str:
        pass

    with pytest.raises(CollectionError, match="Duplicate command name 'greet'"):
        collect_commands(greet, greet_again)


def test_try_collect_returns_error():
    def broken(value) -> str:
        pass

    result = try_collect_commands(greet, broken)
    assert isinstance(result, CollectionError)


# === MODELS === #

def test_pydantic_model_introspection():
    user = introspect_class(User)

    assert user.name == "User"
    assert user.kind == NamedKind.OBJECT
    assert user.docs == ["A registered user."]
    assert [f.name for f in user.fields] == ["id", "displayName", "status", "profile"]

    fields = {f.name: f for f in user.fields}
    assert fields["displayName"].docs == ["Name shown in the UI"]
    assert not fields["displayName"].optional
    assert fields["status"].optional
    assert fields["status"].annotation.reference == "UserStatus"
    assert fields["profile"].annotation.container == ContainerType.OPTIONAL


def test_dataclass_introspection():
    profile = introspect_class(Profile)
    assert profile.docs == ["Public profile details."]
    assert [(f.name, f.optional) for f in profile.fields] == [("bio", False), ("website", True)]

    # synthesized dataclass docstrings are not documentation
    assert introspect_class(Node).docs == []


def test_enum_and_typeddict_introspection():
    status = introspect_class(UserStatus)
    assert status.kind == NamedKind.ENUM
    assert status.variants == [("ACTIVE", "active"), ("INACTIVE", "inactive")]

    settings = introspect_class(Settings)
    assert [(f.name, f.optional) for f in settings.fields] == [("theme", True)]


def test_non_declarable_class_cannot_be_introspected():
    with pytest.raises(CollectionError):
        introspect_class(Token)


# === TYPE DISCOVERY === #

def test_type_discovery_order():
    functions, type_map = collect_commands(get_user, greet, project_root=TESTS_ROOT)

    assert [f.name for f in functions] == ["get_user", "greet"]
    assert list(type_map) == [
        f"{__name__}.User",
        f"{__name__}.UserStatus",
        f"{__name__}.Profile",
    ]
    assert all(named is not None for named in type_map.values())


def test_classes_outside_project_are_not_declared(tmp_path):
    _, type_map = collect_commands(get_user, project_root=str(tmp_path))

    assert type_map == {f"{__name__}.User": None}
    assert typescript.render_types(type_map, ExportConfiguration()) == ""


def test_non_declarable_classes_are_registered_empty():
    def authorize(token: Token) -> bool:
        pass

    _, type_map = collect_commands(authorize)
    assert type_map == {f"{__name__}.Token": None}


def test_self_referencing_types_terminate():
    def tree() -> Node:
        pass

    _, type_map = collect_commands(tree)
    assert list(type_map) == [f"{__name__}.Node"]
    assert type_map[f"{__name__}.Node"].fields[1].annotation.args[0].reference == "Node"


def test_exported_type_names_must_be_unique():
    def make_item():
        @dataclasses.dataclass
        class Item:
            count: int
        return Item

    LocalItem = make_item()

    def first(value: Item) -> None:
        pass

    def second(value: LocalItem) -> None:
        pass

    with pytest.raises(CollectionError, match="Type name 'Item' is used by both"):
        collect_commands(first, second)


# === END TO END === #

def test_integrate_writes_typescript(tmp_path):
    export_path = tmp_path / "src" / "bindings.ts"

    written = integrate(
        get_user,
        greet,
        export_path=export_path,
        project_root=TESTS_ROOT,
        config=ExportConfiguration(),
    )

    content = written.read_text(encoding="utf-8")
    assert written == export_path
    assert content.startswith("/* eslint-disable */\n")
    assert "export function getUser(userId: number, includeProfile: boolean) {" in content
    assert 'return invoke<User>("get_user", { userId, includeProfile })' in content
    assert "export interface User {" in content
    assert "    displayName: string;" in content
    assert 'export type UserStatus = "active" | "inactive"' in content
    assert "export interface Profile {" in content
    assert content.index("export function greet") < content.index("export interface User")


def test_integrate_javascript_default_path(tmp_path):
    written = integrate(greet, lang="js", project_root=str(tmp_path), config=ExportConfiguration())

    assert written == tmp_path.resolve() / "bindings.js"
    content = written.read_text(encoding="utf-8")
    assert " * @param { string } name" in content
    assert 'return invoke("greet", { name })' in content


def test_generate_only_matches_render():
    result = collect_commands(get_user, project_root=TESTS_ROOT)
    cfg = ExportConfiguration()

    assert generate_only(result, "ts", cfg) == typescript.render(result.functions, result.type_map, cfg)
    assert "export interface" not in generate_only(result, "javascript", cfg)


def test_python_names_that_cannot_be_declared_abort_export(tmp_path):
    def set_kind(class_: str, new: int) -> None:
        pass

    export_path = tmp_path / "bindings.ts"
    with pytest.raises(TypeFormattingError, match="command set_kind: Parameter 'class_' becomes 'class'"):
        integrate(set_kind, export_path=export_path, project_root=str(tmp_path), config=ExportConfiguration())

    assert not export_path.exists()


def test_unicode_command_end_to_end():
    def größe(maß: int) -> int:
        pass

    result = collect_commands(größe)
    assert 'export function größe(maß: number) {' in generate_only(result, "ts")
    assert 'return invoke("größe", { maß })' in generate_only(result, "js")
