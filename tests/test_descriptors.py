"""
Unit tests for parameter, method and class descriptors
"""

from enum import Enum
from typing import Annotated, Any, List, Optional, Union

import pytest

from routebind.contracts import SoftDeletable, UrlRoutable
from routebind.descriptors import (
    ClassDescriptor,
    MethodDescriptor,
    clear_cache,
    is_string_backed_enum,
    resolve_types,
)
from tests.fakes import Color, Empty, Level, Owner, Pet, PetActions, Status


class Mixed(Enum):
    A = "a"
    B = 2


class TestResolveTypes:
    """Flattening annotations into declared classes"""

    def test_plain_class(self):
        assert resolve_types(Owner) == (Owner,)

    def test_no_annotation(self):
        import inspect
        assert resolve_types(inspect.Parameter.empty) == ()

    def test_union_keeps_order(self):
        """Test union members in declaration order"""
        assert resolve_types(Union[Pet, Owner]) == (Pet, Owner)
        assert resolve_types(Owner | Pet) == (Owner, Pet)

    def test_optional_drops_none(self):
        assert resolve_types(Optional[Owner]) == (Owner,)
        assert resolve_types(Owner | None) == (Owner,)

    def test_annotated_unwrapped(self):
        assert resolve_types(Annotated[Owner, "route"]) == (Owner,)
        assert resolve_types(Optional[Annotated[Pet, "route"]]) == (Pet,)

    def test_non_classes_dropped(self):
        """Test Any, generics and strings yield nothing"""
        assert resolve_types(Any) == ()
        assert resolve_types(List[int]) == ()
        assert resolve_types(list[int]) == ()
        assert resolve_types("Owner") == ()
        assert resolve_types(Union[list[int], Owner]) == (Owner,)


class TestStringBackedEnum:
    """String-backed enum detection"""

    def test_str_mixin(self):
        assert is_string_backed_enum(Status)

    def test_all_string_values(self):
        assert is_string_backed_enum(Color)

    def test_int_enum(self):
        assert not is_string_backed_enum(Level)

    def test_mixed_values(self):
        assert not is_string_backed_enum(Mixed)

    def test_empty_enum(self):
        assert not is_string_backed_enum(Empty)

    def test_not_an_enum(self):
        assert not is_string_backed_enum(str)
        assert not is_string_backed_enum("test1")


class TestParameterDescriptor:
    """ParameterDescriptor queries"""

    def describe(self, function, name):
        return MethodDescriptor(function).parameter(name)

    def test_enum_queries(self):
        def handler(status: Status | Level, level: Level): ...

        status = self.describe(handler, "status")
        assert status.has_string_backed_enums()
        assert status.string_backed_enums() == (Status,)
        assert not self.describe(handler, "level").has_string_backed_enums()

    def test_capability_queries(self):
        """Test capability matching uses issubclass"""
        def handler(pet: Pet, owner: Optional[Owner], name: str): ...

        pet = self.describe(handler, "pet")
        assert pet.has_type(UrlRoutable)
        assert pet.has_type(SoftDeletable)
        assert self.describe(handler, "owner").types_matching(UrlRoutable) == (Owner,)
        assert not self.describe(handler, "owner").has_type(SoftDeletable)
        assert not self.describe(handler, "name").has_type(UrlRoutable)

    def test_defaults(self):
        def handler(a, b: int = 2, *, c=None): ...

        a, b, c = MethodDescriptor(handler).parameters()
        assert not a.has_default
        assert b.has_default and b.default == 2
        assert c.is_keyword_only and c.default is None

    def test_service_type(self):
        """Test only single non-builtin, non-enum classes are services"""
        def handler(owner: Owner, name: str, status: Status, either: Owner | Pet, untyped): ...

        assert self.describe(handler, "owner").service_type is Owner
        assert self.describe(handler, "name").service_type is None
        assert self.describe(handler, "status").service_type is None
        assert self.describe(handler, "either").service_type is None
        assert self.describe(handler, "untyped").service_type is None

    def test_type_names(self):
        def handler(owner: Optional[Owner], name: str): ...

        assert self.describe(handler, "owner").type_names == ("tests.fakes.Owner",)
        assert self.describe(handler, "name").type_names == ("str",)


class TestMethodDescriptor:
    """MethodDescriptor parameter listing"""

    def test_skips_self_and_var_args(self):
        """Test self, *args and **kwargs are not parameters"""
        class Handler:
            def run(self, owner: Owner, *args, pet: Pet, **kwargs): ...

        method = ClassDescriptor.of(Handler).method("run")

        assert [p.name for p in method.parameters()] == ["owner", "pet"]
        assert method.accepts_var_keyword
        assert not method.is_constructor

    def test_filter_by_capability_keeps_order(self):
        def handler(pet: Pet, name: str, owner: Owner): ...

        method = MethodDescriptor(handler)
        assert [p.name for p in method.parameters(UrlRoutable)] == ["pet", "owner"]
        assert [p.name for p in method.parameters(SoftDeletable)] == ["pet"]

    def test_parameter_lookup(self):
        def handler(pet: Pet): ...

        method = MethodDescriptor(handler)
        assert method.parameter("pet").name == "pet"
        assert method.parameter("owner") is None

    def test_string_annotations_resolved(self):
        """Test forward-reference annotations are resolved"""
        def handler(owner: "Owner", status: "Status"): ...

        method = MethodDescriptor(handler)
        assert method.parameter("owner").types == (Owner,)
        assert method.parameter("status").has_string_backed_enums()

    def test_unresolvable_annotations_fall_back(self):
        """Test an unknown forward reference yields no types instead of failing"""
        def handler(owner: "Missing", pet: Pet): ...  # noqa: F821

        method = MethodDescriptor(handler)
        assert method.parameter("owner").types == ()
        assert method.parameter("pet").types == (Pet,)


class TestClassDescriptor:
    """ClassDescriptor lookups and instantiation"""

    def test_cached_per_class(self):
        """Test of() returns the cached descriptor for classes and instances"""
        assert ClassDescriptor.of(PetActions) is ClassDescriptor.of(PetActions())

        before = ClassDescriptor.of(PetActions)
        clear_cache()
        assert ClassDescriptor.of(PetActions) is not before

    def test_constructor_detection(self):
        assert not ClassDescriptor.of(PetActions).has_constructor()
        assert ClassDescriptor.of(PetActions).constructor() is None
        assert ClassDescriptor.of(Owner).has_constructor()
        assert ClassDescriptor.of(Owner).constructor().is_constructor

    def test_inherited_constructor(self):
        class Base:
            def __init__(self, owner: Owner):
                self.owner = owner

        class Child(Base):
            pass

        descriptor = ClassDescriptor.of(Child)
        assert descriptor.has_constructor()
        assert [p.name for p in descriptor.constructor().parameters()] == ["owner"]

    def test_method_kinds(self):
        """Test plain, static and class methods; non-callables are None"""
        class Handler:
            label = "handler"

            def plain(self, owner: Owner): ...

            @staticmethod
            def static(pet: Pet): ...

            @classmethod
            def build(cls, owner: Owner): ...

        descriptor = ClassDescriptor.of(Handler)
        assert [p.name for p in descriptor.method("plain").parameters()] == ["owner"]
        assert [p.name for p in descriptor.method("static").parameters()] == ["pet"]
        assert [p.name for p in descriptor.method("build").parameters()] == ["owner"]
        assert descriptor.method("label") is None
        assert descriptor.method("missing") is None

    def test_instantiate_without_constructor(self):
        instance = ClassDescriptor.of(PetActions).instantiate()
        assert isinstance(instance, PetActions)

    def test_instantiate_with_arguments(self):
        owner = ClassDescriptor.of(Owner).instantiate(["9"], {"name": "Ada"})
        assert owner.key == "9"
        assert owner.name == "Ada"

    def test_rejects_non_class(self):
        with pytest.raises(TypeError):
            ClassDescriptor("PetActions")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
