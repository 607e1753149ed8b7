"""
Dashboard - per-address account cards driven by asyncio tasks.

Example usage:
    from lighter_stats import Dashboard

    async with Dashboard() as dashboard:
        await dashboard.show("0xabc...\\n0xdef...")
        await dashboard.wait()
        print(dashboard.render())

Each card fetches independently in its own task. A card only commits the
result of its latest fetch; results from superseded fetches are dropped.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Set

from .aggregator import AccountAggregator, AggregationError
from .controller import AddressListController
from .http_client import HttpClient
from .market_resolver import MarketSymbolMap, MarketSymbolResolver
from .models.account import AccountSnapshot
from .models.config import ConnectionConfig
from .presenter import CardView, present_card, render_card_text
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class AccountCard:
    """
    Card state for one address.

    Attributes:
        address: Address shown by the card
        loading: True while the latest fetch is in flight
        error: Failure message of the latest fetch, if it failed
        snapshot: Result of the latest successful fetch
    """

    def __init__(
        self,
        address: str,
        aggregator: AccountAggregator,
        on_update: Optional[Callable[["AccountCard"], None]] = None,
    ):
        self.address = address
        self.loading = True
        self.error: Optional[str] = None
        self.snapshot: Optional[AccountSnapshot] = None
        self._aggregator = aggregator
        self._on_update = on_update
        self._generation = 0

    @property
    def generation(self) -> int:
        """Token of the most recently started fetch."""
        return self._generation

    @property
    def view(self) -> CardView:
        """Presenter view of the current state."""
        return present_card(self.address, self.loading, self.error, self.snapshot)

    def schedule_refresh(self, symbol_map: Optional[MarketSymbolMap]) -> asyncio.Task:
        """Start a fetch in a new task; the token is taken immediately."""
        generation = self._begin()
        return asyncio.create_task(self._load(generation, symbol_map))

    async def refresh(self, symbol_map: Optional[MarketSymbolMap]) -> None:
        """Fetch and commit in the current task."""
        generation = self._begin()
        await self._load(generation, symbol_map)

    def _begin(self) -> int:
        self._generation += 1
        self.loading = True
        self.error = None
        self._notify()
        return self._generation

    async def _load(self, generation: int, symbol_map: Optional[MarketSymbolMap]) -> None:
        try:
            snapshot = await self._aggregator.aggregate(self.address, symbol_map)
        except AggregationError as e:
            logger.error(f"Failed to load {self.address}: {e}")
            self._commit(generation, error=e.message, snapshot=None)
        except Exception as e:
            logger.exception(f"Unexpected error loading {self.address}")
            self._commit(generation, error=str(e) or type(e).__name__, snapshot=None)
        else:
            self._commit(generation, error=None, snapshot=snapshot)

    def _commit(
        self,
        generation: int,
        error: Optional[str],
        snapshot: Optional[AccountSnapshot],
    ) -> bool:
        if generation != self._generation:
            logger.debug(
                f"Dropping stale result for {self.address} "
                f"(fetch {generation}, current {self._generation})"
            )
            return False

        self.loading = False
        self.error = error
        self.snapshot = snapshot
        self._notify()
        return True

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self)


class Dashboard:
    """
    Owns the shared session, symbol resolver and one card per address.

    Cards never share mutable state; the only shared data is the read-only
    market symbol map.
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        on_update: Optional[Callable[[AccountCard], None]] = None,
        http_client: Optional[HttpClient] = None,
    ):
        """
        Initialize the dashboard.

        Args:
            config: Connection configuration (defaults to public endpoints)
            on_update: Called with the card after every state change
            http_client: Optional HTTP client shared by resolver and aggregator
        """
        self._config = config or ConnectionConfig()
        self._session_manager = SessionManager(self._config)
        http_client = http_client or HttpClient()
        self._resolver = MarketSymbolResolver(
            self._config, self._session_manager.create_session, http_client
        )
        self._aggregator = AccountAggregator(
            self._config, self._session_manager.create_session, http_client
        )
        self._controller = AddressListController()
        self._on_update = on_update
        self._cards: Dict[str, AccountCard] = {}
        self._tasks: Set[asyncio.Task] = set()

    @property
    def cards(self) -> List[AccountCard]:
        """Displayed cards, in submission order."""
        return list(self._cards.values())

    @property
    def refresh_counter(self) -> int:
        """Refresh counter of the address controller."""
        return self._controller.refresh_counter

    @property
    def resolver(self) -> MarketSymbolResolver:
        """Market symbol resolver shared by all cards."""
        return self._resolver

    async def show(self, text: str) -> List[AccountCard]:
        """
        Submit raw address text and re-fetch every listed card.

        Cards for addresses still listed are reused, so an older in-flight
        fetch for them cannot overwrite the new one.
        """
        addresses = self._controller.submit(text)
        symbol_map = await self._resolver.resolve()

        cards: Dict[str, AccountCard] = {}
        for address in addresses:
            if address in cards:
                continue
            card = self._cards.get(address)
            if card is None:
                card = AccountCard(address, self._aggregator, self._on_update)
            cards[address] = card
        self._cards = cards

        for card in cards.values():
            task = card.schedule_refresh(symbol_map)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        return self.cards

    async def wait(self) -> None:
        """Wait until every in-flight card fetch has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def render(self, color: bool = True) -> str:
        """Render all cards as text, in submission order."""
        return "\n\n".join(render_card_text(card.view, color) for card in self._cards.values())

    async def close(self) -> None:
        """Cancel in-flight fetches and close the HTTP session."""
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._session_manager.close_session()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
