"""Tests for replace/add/delete update semantics."""

from micropress.domain.operations import UpdateRequest
from micropress.domain.update import apply_update


def _props() -> dict[str, list]:
    return {
        "name": ["Post"],
        "category": ["a", "b", "a"],
        "published": [True],
    }


class TestReplace:
    def test_overwrites(self) -> None:
        result = apply_update(_props(), UpdateRequest(replace={"name": ["New"]}))
        assert result["name"] == ["New"]

    def test_sets_new_property(self) -> None:
        result = apply_update(_props(), UpdateRequest(replace={"summary": ["S"]}))
        assert result["summary"] == ["S"]

    def test_unpublish(self) -> None:
        result = apply_update(_props(), UpdateRequest(replace={"published": [False]}))
        assert result["published"] == [False]
        assert result["category"] == ["a", "b", "a"]


class TestAdd:
    def test_new_property(self) -> None:
        result = apply_update(_props(), UpdateRequest(add={"syndication": ["https://s/1"]}))
        assert result["syndication"] == ["https://s/1"]

    def test_appends_keeping_duplicates(self) -> None:
        result = apply_update(_props(), UpdateRequest(add={"category": ["b", "c"]}))
        assert result["category"] == ["a", "b", "a", "b", "c"]


class TestDelete:
    def test_bare_names_remove_property(self) -> None:
        result = apply_update(_props(), UpdateRequest(delete=["category"]))
        assert "category" not in result
        assert result["name"] == ["Post"]

    def test_bare_name_is_the_property_name(self) -> None:
        # In the list form the entry itself names the property to remove;
        # the list index is never used as a key.
        props = {"0": ["kept"], "category": ["a"]}
        result = apply_update(props, UpdateRequest(delete=["category"]))
        assert result == {"0": ["kept"]}

    def test_missing_name_is_noop(self) -> None:
        props = _props()
        assert apply_update(props, UpdateRequest(delete=["missing"])) == props

    def test_name_mapped_to_none_removes_property(self) -> None:
        result = apply_update(_props(), UpdateRequest(delete={"category": None}))
        assert "category" not in result

    def test_values_removed_once_each(self) -> None:
        result = apply_update(_props(), UpdateRequest(delete={"category": ["a"]}))
        assert result["category"] == ["b", "a"]

    def test_unknown_values_ignored(self) -> None:
        result = apply_update(_props(), UpdateRequest(delete={"category": ["zzz"]}))
        assert result["category"] == ["a", "b", "a"]

    def test_emptied_property_dropped(self) -> None:
        result = apply_update(_props(), UpdateRequest(delete={"name": ["Post"]}))
        assert "name" not in result

    def test_values_from_missing_property_is_noop(self) -> None:
        props = _props()
        assert apply_update(props, UpdateRequest(delete={"missing": ["x"]})) == props


class TestOrdering:
    def test_replace_then_add(self) -> None:
        request = UpdateRequest(add={"category": ["c"]}, replace={"category": ["x"]})
        assert apply_update(_props(), request)["category"] == ["x", "c"]

    def test_add_then_delete(self) -> None:
        request = UpdateRequest(delete={"category": ["c"]}, add={"category": ["c"]})
        assert apply_update(_props(), request)["category"] == ["a", "b", "a"]

    def test_replace_then_delete_whole(self) -> None:
        request = UpdateRequest(delete=["category"], replace={"category": ["x"]})
        assert "category" not in apply_update(_props(), request)

    def test_input_not_mutated(self) -> None:
        props = _props()
        apply_update(
            props,
            UpdateRequest(replace={"name": ["X"]}, add={"category": ["z"]}, delete=["published"]),
        )
        assert props == _props()

    def test_empty_request_is_identity(self) -> None:
        assert apply_update(_props(), UpdateRequest()) == _props()
