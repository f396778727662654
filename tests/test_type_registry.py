from collections import OrderedDict

import pytest

from apidoc.core.errors import UnresolvedType
from apidoc.core.typeref import TypeRegistry, normalize_type_ref

from sample_app import User, UserResource


def test_normalize_strips_one_leading_separator():
    assert normalize_type_ref(".myapp.models.User") == "myapp.models.User"
    assert normalize_type_ref("\\App\\Models\\User") == "App\\Models\\User"
    assert normalize_type_ref("myapp.models.User") == "myapp.models.User"
    assert normalize_type_ref("  User ") == "User"


def test_registered_class_by_short_and_qualified_name(types):
    assert types.resolve_type("User") is User
    assert types.resolve_type(f"{User.__module__}.User") is User
    assert types.resolve_type(".UserResource") is UserResource


def test_dotted_and_colon_imports():
    reg = TypeRegistry()
    assert reg.resolve_type("collections.OrderedDict") is OrderedDict
    assert reg.resolve_type("collections:OrderedDict") is OrderedDict


def test_alias_to_dotted_path():
    reg = TypeRegistry(aliases={"Ordered": "collections.OrderedDict"})
    assert reg.resolve_type("Ordered") is OrderedDict


@pytest.mark.parametrize(
    "name",
    ["", "Nope", "no_such_module_xyz.Thing", "collections.NoSuchThing", "os.path.join"],
)
def test_unknown_names_raise_unresolved_type(name):
    with pytest.raises(UnresolvedType):
        TypeRegistry().resolve_type(name)


def test_unresolved_type_is_a_lookup_error():
    with pytest.raises(LookupError):
        TypeRegistry().resolve_type("Nope")
