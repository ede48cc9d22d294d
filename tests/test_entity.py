import pytest

from techdocs.publish.entity import EntityName, to_entity_name


def test_root_dir_and_object_key():
    entity = EntityName("default", "Component", "foo")
    assert entity.root_dir == "default/Component/foo"
    assert entity.object_key("sub/page.html") == "default/Component/foo/sub/page.html"
    assert str(entity) == "default/Component/foo"


def test_entity_name_is_immutable():
    entity = EntityName("default", "Component", "foo")
    with pytest.raises(AttributeError):
        entity.name = "bar"  # type: ignore[misc]


@pytest.mark.parametrize("parts", [("", "Component", "foo"), ("default", "", "foo"), ("default", "Component", "")])
def test_empty_parts_are_rejected(parts):
    with pytest.raises(ValueError):
        EntityName(*parts)


def test_parse_reference():
    assert EntityName.parse("default/Component/foo") == EntityName("default", "Component", "foo")
    assert EntityName.parse("/default/Component/foo/") == EntityName("default", "Component", "foo")
    with pytest.raises(ValueError):
        EntityName.parse("Component/foo")


def test_from_catalog_entity_defaults_namespace():
    entity = {"kind": "Component", "metadata": {"name": "documented-component"}}
    assert EntityName.from_entity(entity) == EntityName("default", "Component", "documented-component")


def test_from_catalog_entity_uses_namespace():
    entity = {"kind": "API", "metadata": {"name": "petstore", "namespace": "payments"}}
    assert to_entity_name(entity).root_dir == "payments/API/petstore"


def test_keys_are_case_sensitive():
    assert EntityName("default", "Component", "Foo").root_dir != EntityName("default", "component", "foo").root_dir


@pytest.mark.parametrize(
    "parts",
    [
        ("a/b", "c", "d"),
        ("a", "b/c", "d"),
        ("default", "Component", ".."),
        ("default", "..", "foo"),
        (".", "Component", "foo"),
        ("default", "Component", "foo\\bar"),
    ],
)
def test_parts_must_be_single_key_segments(parts):
    with pytest.raises(ValueError):
        EntityName(*parts)


def test_distinct_entities_have_distinct_prefixes():
    first = EntityName("a", "b", "c.d")
    second = EntityName("a", "b.c", "d")
    assert first.object_key("index.html") != second.object_key("index.html")


def test_catalog_entity_with_slash_in_name_is_rejected():
    with pytest.raises(ValueError):
        EntityName.from_entity({"kind": "Component", "metadata": {"name": "../foo"}})
