"""
Session runtime for the LittleChef state machine.

``ChefSession`` is the single writer of application state. It feeds events
through the reducer, mirrors the cookbook and shopping list to storage
whenever they change, and runs the generation requests the reducer asks
for on the running asyncio loop.
"""

import asyncio
import logging
from typing import Callable, Optional, Set

from adapters.llm.base import BaseRecipeGenerator, GenerationError
from domain.events import (
    CollectionsLoaded,
    ConfirmationRequired,
    Effect,
    Event,
    ImageGenerated,
    ImageGenerationFailed,
    RecipeGenerated,
    RecipeGenerationFailed,
    RequestImage,
    RequestRecipe,
    Transition,
)
from domain.reducer import reduce
from domain.repo_abc import CollectionStore, StorageSlot
from domain.state import AppState

logger = logging.getLogger(__name__)


class ChefSession:
    """Owns the application state and serializes every change to it."""

    def __init__(
        self,
        generator: BaseRecipeGenerator,
        store: CollectionStore,
        initial_state: Optional[AppState] = None,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.generator = generator
        self.store = store
        self._state = initial_state or AppState()
        self._id_factory = id_factory
        self._clock = clock
        self._background: Set[asyncio.Task] = set()

    @property
    def state(self) -> AppState:
        """Current state snapshot."""
        return self._state

    @property
    def has_background_work(self) -> bool:
        return any(not task.done() for task in self._background)

    def load(self) -> AppState:
        """Hydrate both collections from storage."""
        event = CollectionsLoaded(
            saved_recipes=tuple(self.store.load(StorageSlot.COOKBOOK)),
            shopping_list=tuple(self.store.load(StorageSlot.SHOPPING)),
        )
        self._apply(event, persist=False)
        logger.info(
            f"Loaded {len(self._state.saved_recipes)} saved recipes and "
            f"{len(self._state.shopping_list)} shopping items"
        )
        return self._state

    async def dispatch(self, event: Event) -> Transition:
        """Apply an event and carry out its effects.

        Recipe requests are awaited before this returns; image requests run
        in the background so the new recipe is usable immediately.

        Returns:
            The transition produced by ``event`` itself
        """
        transition = self._apply(event)
        for effect in transition.effects:
            await self._run_effect(effect)
        return transition

    def _apply(self, event: Event, persist: bool = True) -> Transition:
        previous = self._state
        transition = reduce(
            previous, event, id_factory=self._id_factory, clock=self._clock
        )
        self._state = transition.state
        if persist:
            self._persist_changes(previous, transition.state)
        return transition

    def _persist_changes(self, previous: AppState, current: AppState) -> None:
        # The reducer only rebuilds a collection when it changes it
        if current.saved_recipes is not previous.saved_recipes:
            self.store.save(StorageSlot.COOKBOOK, current.saved_recipes)
        if current.shopping_list is not previous.shopping_list:
            self.store.save(StorageSlot.SHOPPING, current.shopping_list)

    async def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, RequestRecipe):
            await self._generate_recipe(effect)
        elif isinstance(effect, RequestImage):
            task = asyncio.create_task(self._generate_image(effect))
            self._background.add(task)
            task.add_done_callback(self._background.discard)
        elif isinstance(effect, ConfirmationRequired):
            # Surfaced to the caller through the returned transition
            logger.debug(f"Confirmation required: {effect.message}")
        else:
            raise TypeError(f"Unsupported effect: {type(effect).__name__}")

    async def _generate_recipe(self, request: RequestRecipe) -> None:
        try:
            recipe = await self.generator.request_recipe(
                request.ingredients, request.restrictions, request.time_bucket
            )
        except asyncio.CancelledError:
            # Clear the busy flag before propagating
            self._apply(RecipeGenerationFailed(request.token, "cancelled"))
            raise
        except GenerationError as e:
            await self.dispatch(RecipeGenerationFailed(request.token, str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error during recipe generation")
            await self.dispatch(
                RecipeGenerationFailed(request.token, f"unexpected error: {e}")
            )
            return
        await self.dispatch(RecipeGenerated(request.token, recipe))

    async def _generate_image(self, request: RequestImage) -> None:
        try:
            image_url = await self.generator.request_image(
                request.title, request.description
            )
        except asyncio.CancelledError:
            self._apply(ImageGenerationFailed(request.token, "cancelled"))
            raise
        except GenerationError as e:
            await self.dispatch(ImageGenerationFailed(request.token, str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error during image generation")
            await self.dispatch(
                ImageGenerationFailed(request.token, f"unexpected error: {e}")
            )
            return
        await self.dispatch(ImageGenerated(request.token, image_url))

    async def wait_for_background(self) -> None:
        """Wait until every outstanding image request has completed."""
        while self.has_background_work:
            await asyncio.gather(
                *[task for task in self._background if not task.done()],
                return_exceptions=True,
            )

    async def close(self) -> None:
        """Cancel outstanding requests and release the generator."""
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        self.generator.close()
