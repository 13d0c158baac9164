"""
Tests for the session runtime: generation flow, persistence and hydration.
"""

import asyncio

import pytest

from adapters.llm.base import GenerationRefused, GenerationTransportError
from agent import ChefSession
from domain.entities import SavedRecipe, ShoppingItem
from domain.events import (
    AddIngredient,
    AddManualShoppingItem,
    AddRecipeIngredientsToShoppingList,
    ClearShoppingList,
    ConfirmationRequired,
    GenerateRecipe,
    LoadSavedRecipe,
    SaveCurrentRecipe,
    SetView,
    ToggleDietaryRestriction,
    ToggleShoppingItem,
)
from domain.repo_abc import StorageSlot
from domain.state import EMPTY_PANTRY_ERROR, GenerationPhase, View
from tests.base_test import make_recipe


async def stock_pantry(session, *items):
    for item in items:
        await session.dispatch(AddIngredient(item))


class TestGenerationFlow:
    """Full generation cycle through the session."""

    @pytest.mark.asyncio
    async def test_egg_and_flour(self, session, mock_generator):
        await stock_pantry(session, "egg", "flour")

        await session.dispatch(GenerateRecipe())
        state = session.state

        assert state.recipe is not None
        assert not state.is_loading
        assert len(state.recipe.ingredients) >= 1
        assert state.recipe.instructions[0].step_number == 1
        mock_generator.request_recipe.assert_awaited_once_with(
            ("egg", "flour"), (), "30 mins"
        )

        await session.wait_for_background()

        assert session.state.food_image_url == "data:image/png;base64,aW1hZ2U="
        assert session.state.phase == GenerationPhase.READY
        mock_generator.request_image.assert_awaited_once_with(
            state.recipe.title, state.recipe.description
        )

        await session.dispatch(SetView(View.SAVED))
        await session.dispatch(SetView(View.HOME))
        assert session.state.recipe == state.recipe

    @pytest.mark.asyncio
    async def test_preferences_forwarded(self, session, mock_generator):
        await stock_pantry(session, "tofu")
        await session.dispatch(ToggleDietaryRestriction("Vegan"))

        await session.dispatch(GenerateRecipe())

        mock_generator.request_recipe.assert_awaited_once_with(
            ("tofu",), ("Vegan",), "30 mins"
        )

    @pytest.mark.asyncio
    async def test_empty_pantry_never_calls_generator(
        self, session, mock_generator
    ):
        await session.dispatch(GenerateRecipe())

        assert session.state.error == EMPTY_PANTRY_ERROR
        mock_generator.request_recipe.assert_not_called()
        mock_generator.request_image.assert_not_called()

    @pytest.mark.asyncio
    async def test_recipe_failure(self, session, mock_generator):
        mock_generator.request_recipe.side_effect = GenerationTransportError(
            "quota exceeded"
        )
        await stock_pantry(session, "egg")

        await session.dispatch(GenerateRecipe())

        assert session.state.recipe is None
        assert not session.state.is_loading
        assert session.state.error is not None
        assert session.state.phase == GenerationPhase.RECIPE_FAILED
        mock_generator.request_image.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_clears_busy_flag(
        self, session, mock_generator
    ):
        mock_generator.request_recipe.side_effect = RuntimeError("boom")
        await stock_pantry(session, "egg")

        await session.dispatch(GenerateRecipe())

        assert not session.state.is_loading
        assert session.state.phase == GenerationPhase.RECIPE_FAILED

    @pytest.mark.asyncio
    async def test_image_failure_keeps_recipe(self, session, mock_generator):
        mock_generator.request_image.side_effect = GenerationRefused(
            "I can't draw that."
        )
        await stock_pantry(session, "egg")

        await session.dispatch(GenerateRecipe())
        await session.wait_for_background()

        state = session.state
        assert state.recipe is not None
        assert state.food_image_url is None
        assert not state.is_generating_image
        assert state.error is None
        assert state.phase == GenerationPhase.IMAGE_FAILED

    @pytest.mark.asyncio
    async def test_stale_image_is_discarded(self, session, mock_generator):
        release = asyncio.Event()
        first_call = True

        async def slow_then_fast(title, description):
            nonlocal first_call
            if first_call:
                first_call = False
                await release.wait()
                return "data:image/png;base64,b2xk"
            return "data:image/png;base64,bmV3"

        mock_generator.request_image.side_effect = slow_then_fast
        mock_generator.request_recipe.side_effect = [
            make_recipe("Premier - First"),
            make_recipe("Second - Second"),
        ]
        await stock_pantry(session, "egg")

        await session.dispatch(GenerateRecipe())
        await asyncio.sleep(0)
        await session.dispatch(GenerateRecipe())
        release.set()
        await session.wait_for_background()

        state = session.state
        assert state.recipe.title == "Second - Second"
        assert state.food_image_url == "data:image/png;base64,bmV3"
        assert state.generation_token == 2

    @pytest.mark.asyncio
    async def test_close_cancels_pending_image(self, session, mock_generator):
        never = asyncio.Event()

        async def hang(title, description):
            await never.wait()

        mock_generator.request_image.side_effect = hang
        await stock_pantry(session, "egg")
        await session.dispatch(GenerateRecipe())
        assert session.has_background_work

        await session.close()

        assert not session.has_background_work
        assert not session.state.is_generating_image
        mock_generator.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancelled_recipe_clears_busy_flag(
        self, session, mock_generator
    ):
        never = asyncio.Event()

        async def hang(ingredients, restrictions, time_bucket):
            await never.wait()

        mock_generator.request_recipe.side_effect = hang
        await stock_pantry(session, "egg")

        request = asyncio.create_task(session.dispatch(GenerateRecipe()))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert session.state.is_loading

        request.cancel()
        with pytest.raises(asyncio.CancelledError):
            await request

        assert not session.state.is_loading
        assert session.state.phase == GenerationPhase.RECIPE_FAILED
        assert session.state.can_generate
        mock_generator.request_image.assert_not_called()

    @pytest.mark.asyncio
    async def test_waiting_survives_close(self, session, mock_generator):
        never = asyncio.Event()

        async def hang(title, description):
            await never.wait()

        mock_generator.request_image.side_effect = hang
        await stock_pantry(session, "egg")
        await session.dispatch(GenerateRecipe())

        waiter = asyncio.create_task(session.wait_for_background())
        await asyncio.sleep(0)
        await session.close()

        await waiter
        assert not session.has_background_work


class TestPersistence:
    """Collections are mirrored to storage when they change."""

    @pytest.mark.asyncio
    async def test_save_persists_cookbook(self, session, collection_store):
        await stock_pantry(session, "egg")
        await session.dispatch(GenerateRecipe())
        await session.wait_for_background()

        await session.dispatch(SaveCurrentRecipe())

        stored = collection_store.load(StorageSlot.COOKBOOK)
        assert len(stored) == 1
        assert stored[0].recipe == session.state.recipe
        assert stored[0].image_url == "data:image/png;base64,aW1hZ2U="
        assert stored[0].timestamp == 1700000000000

    @pytest.mark.asyncio
    async def test_recipe_ingredients_become_items(
        self, session, collection_store
    ):
        await stock_pantry(session, "egg")
        await session.dispatch(GenerateRecipe())
        before = len(session.state.shopping_list)

        await session.dispatch(AddRecipeIngredientsToShoppingList())

        items = session.state.shopping_list
        recipe = session.state.recipe
        assert len(items) == before + len(recipe.ingredients)
        assert [(i.name, i.amount) for i in items[before:]] == [
            (ing.item, ing.amount) for ing in recipe.ingredients
        ]
        assert not any(i.checked for i in items)
        assert collection_store.load(StorageSlot.SHOPPING) == list(items)

    @pytest.mark.asyncio
    async def test_toggle_persists(self, session, collection_store):
        await session.dispatch(AddManualShoppingItem("Bread"))
        item_id = session.state.shopping_list[0].id

        await session.dispatch(ToggleShoppingItem(item_id))

        assert collection_store.load(StorageSlot.SHOPPING)[0].checked

    @pytest.mark.asyncio
    async def test_unconfirmed_clear_keeps_list(
        self, session, collection_store
    ):
        await session.dispatch(AddManualShoppingItem("Bread"))

        transition = await session.dispatch(ClearShoppingList())

        assert isinstance(transition.effects[0], ConfirmationRequired)
        assert len(session.state.shopping_list) == 1

        await session.dispatch(ClearShoppingList(confirmed=True))

        assert session.state.shopping_list == ()
        assert collection_store.load(StorageSlot.SHOPPING) == []

    @pytest.mark.asyncio
    async def test_pantry_changes_do_not_touch_storage(
        self, session, temp_database
    ):
        await stock_pantry(session, "egg")
        await session.dispatch(SetView(View.SHOPPING))

        assert temp_database.get_item("littlechef_cookbook") is None
        assert temp_database.get_item("littlechef_shopping") is None


class TestHydration:
    def test_load_restores_collections(
        self, collection_store, mock_generator
    ):
        saved = SavedRecipe(
            id="s1",
            recipe=make_recipe(),
            image_url=None,
            timestamp=1700000000000,
        )
        item = ShoppingItem(id="i1", name="Bread")
        collection_store.save(StorageSlot.COOKBOOK, [saved])
        collection_store.save(StorageSlot.SHOPPING, [item])

        session = ChefSession(mock_generator, collection_store)
        state = session.load()

        assert state.saved_recipes == (saved,)
        assert state.shopping_list == (item,)
        assert state.recipe is None

    @pytest.mark.asyncio
    async def test_loaded_recipe_can_be_opened(
        self, collection_store, mock_generator
    ):
        saved = SavedRecipe(
            id="s1",
            recipe=make_recipe("Ancien - Old"),
            image_url="data:image/png;base64,b2xk",
            timestamp=1700000000000,
        )
        collection_store.save(StorageSlot.COOKBOOK, [saved])
        session = ChefSession(mock_generator, collection_store)
        session.load()

        await session.dispatch(LoadSavedRecipe("s1"))

        assert session.state.recipe.title == "Ancien - Old"
        assert session.state.food_image_url == "data:image/png;base64,b2xk"
        assert session.state.is_current_recipe_saved
