"""Tests for the shopping list template store."""

from datetime import datetime

import pytest

from pantryplan.exceptions import ShoppingListNotFound, TemplateNotFound, TemplateProtected
from pantryplan.plan.aisles import AisleCategory
from pantryplan.plan.templates import (
    BUILT_IN_TEMPLATES,
    Template,
    TemplateSeed,
    TemplateStore,
    instantiate_template,
    snapshot_items,
)


@pytest.fixture
def store(template_repository, shopping_lists):
    return TemplateStore(template_repository, shopping_lists)


class TestTemplateHelpers:
    """Tests for instantiate_template and snapshot_items."""

    def test_instantiate_creates_fresh_unchecked_items(self):
        template = Template(
            id="t-1",
            name="Test",
            items=(TemplateSeed("2 cups flour", "2", "cups"), TemplateSeed("milk")),
        )
        now = datetime(2024, 1, 1)
        items = instantiate_template(template, now)

        assert [item.text for item in items] == ["2 cups flour", "milk"]
        assert [item.position for item in items] == [1, 2]
        assert all(not item.is_checked for item in items)
        assert items[0].quantity == "2"
        assert items[0].unit == "cups"
        assert items[0].name == "flour"
        assert items[1].aisle == AisleCategory.DAIRY
        assert items[0].created_at == now

    def test_instantiate_twice_gives_new_ids(self):
        template = BUILT_IN_TEMPLATES[0]
        first = {item.id for item in instantiate_template(template)}
        second = {item.id for item in instantiate_template(template)}
        assert first.isdisjoint(second)

    def test_snapshot_follows_position(self, list_items):
        seeds = snapshot_items(reversed(list_items))
        assert [seed.text for seed in seeds] == [item.text for item in list_items]


class TestTemplateStore:
    """Tests for TemplateStore."""

    @pytest.mark.asyncio
    async def test_list_templates_built_ins_first(self, store, template_repository):
        await template_repository.add(Template(id="user-1", name="Mine"))

        templates = await store.list_templates()

        assert [t.id for t in templates[: len(BUILT_IN_TEMPLATES)]] == [
            t.id for t in BUILT_IN_TEMPLATES
        ]
        assert templates[-1].id == "user-1"
        assert all(t.is_default for t in templates[:-1])

    @pytest.mark.asyncio
    async def test_apply_replaces_list_contents(self, store, shopping_lists):
        items = await store.apply("list-1", "builtin-taco-night")

        stored = shopping_lists.lists["list-1"]
        assert stored == items
        assert [item.position for item in stored] == list(range(1, len(stored) + 1))
        assert "1 lb ground beef" in [item.text for item in stored]
        assert not {"item-1", "item-2"} & {item.id for item in stored}

    @pytest.mark.asyncio
    async def test_apply_unknown_template_leaves_list_untouched(
        self, store, shopping_lists, list_items
    ):
        """Test that an unknown template id fails before any mutation."""
        with pytest.raises(TemplateNotFound):
            await store.apply("list-1", "no-such-template")

        assert shopping_lists.replace_calls == 0
        assert shopping_lists.lists["list-1"] == list_items

    @pytest.mark.asyncio
    async def test_apply_to_unknown_list(self, store):
        with pytest.raises(ShoppingListNotFound):
            await store.apply("missing-list", "builtin-taco-night")

    @pytest.mark.asyncio
    async def test_save_as_template_then_apply(self, store, shopping_lists, template_repository):
        template = await store.save_as_template("list-1", "Baking", "Weekend baking")

        assert template.is_default is False
        assert template.description == "Weekend baking"
        assert [seed.text for seed in template.items] == [
            "2 cups flour",
            "3 eggs",
            "1 cup flour",
            "salt",
        ]
        assert await template_repository.get(template.id) == template

        items = await store.apply("empty-list", template.id)
        assert [item.text for item in items] == [seed.text for seed in template.items]
        assert len(shopping_lists.lists["empty-list"]) == 4

    @pytest.mark.asyncio
    async def test_delete_user_template(self, store, template_repository):
        await template_repository.add(Template(id="user-1", name="Mine"))

        await store.delete("user-1")

        assert await template_repository.get("user-1") is None

    @pytest.mark.asyncio
    async def test_delete_built_in_is_protected(self, store):
        with pytest.raises(TemplateProtected):
            await store.delete("builtin-weekly-essentials")

    @pytest.mark.asyncio
    async def test_delete_unknown(self, store):
        with pytest.raises(TemplateNotFound):
            await store.delete("no-such-template")
