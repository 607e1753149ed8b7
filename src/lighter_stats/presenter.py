# -*- coding: utf-8 -*-
"""
Account card presentation.

``present_card`` turns the card state into an immutable view model;
``render_card_text`` draws that view as terminal text.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from colorama import Fore, Style
from tabulate import tabulate

from .constants import EMPTY_POSITIONS_MESSAGE
from .models.account import AccountSnapshot, PositionSide


class CardState(Enum):
    """Mutually exclusive card states."""
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class BalanceTone(Enum):
    """Colour hint for the total balance, from the sign of aggregate PnL."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


POSITION_HEADERS = ("Token", "Size", "Entry Price", "PnL")


@dataclass(frozen=True)
class PositionRow:
    """One row of the positions table."""
    token: str
    side: str
    size: str
    entry_price: str
    pnl: str
    pnl_tone: BalanceTone


@dataclass(frozen=True)
class RecentTradeView:
    """Recent trade summary block."""
    symbol: str
    entry_price: str
    close_price: str
    pnl: str
    pnl_tone: BalanceTone


@dataclass(frozen=True)
class CardView:
    """
    Renderable account card.

    Only the fields relevant to ``state`` are populated.
    """
    address: str
    state: CardState
    message: Optional[str] = None
    available_balance: Optional[str] = None
    total_balance: Optional[str] = None
    balance_tone: BalanceTone = BalanceTone.NEUTRAL
    rows: Tuple[PositionRow, ...] = ()
    empty_message: Optional[str] = None
    recent_trade: Optional[RecentTradeView] = None


def tone_for(value: Decimal) -> BalanceTone:
    """Map the sign of a figure to its colour hint."""
    if value > 0:
        return BalanceTone.POSITIVE
    if value < 0:
        return BalanceTone.NEGATIVE
    return BalanceTone.NEUTRAL


def format_usd(value: Decimal, decimals: int = 2) -> str:
    """Format a dollar amount, sign before the symbol."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def present_card(
    address: str,
    loading: bool,
    error: Optional[str],
    snapshot: Optional[AccountSnapshot],
) -> CardView:
    """Build the view for one card. Loading wins over error, error over data."""
    if loading:
        return CardView(
            address=address,
            state=CardState.LOADING,
            message=f"Loading data for {address}...",
        )

    if error is not None or snapshot is None:
        return CardView(
            address=address,
            state=CardState.ERROR,
            message=error if error is not None else "No data loaded",
        )

    rows = tuple(
        PositionRow(
            token=position.symbol,
            side=position.side.value,
            size=f"{position.size:.4f}",
            entry_price=format_usd(position.entry_price),
            pnl=f"{format_usd(position.pnl, 3)} ({position.pnl_percentage:+.2f}%)",
            pnl_tone=tone_for(position.pnl),
        )
        for position in snapshot.positions
    )

    recent_trade = None
    if snapshot.recent_trade_pnl is not None:
        trade = snapshot.recent_trade_pnl
        recent_trade = RecentTradeView(
            symbol=trade.symbol,
            entry_price=format_usd(trade.entry_price),
            close_price=format_usd(trade.close_price),
            pnl=format_usd(trade.pnl, 3),
            pnl_tone=tone_for(trade.pnl),
        )

    return CardView(
        address=address,
        state=CardState.READY,
        available_balance=format_usd(snapshot.available_balance),
        total_balance=format_usd(snapshot.total_balance),
        balance_tone=tone_for(snapshot.total_pnl),
        rows=rows,
        empty_message=None if rows else EMPTY_POSITIONS_MESSAGE,
        recent_trade=recent_trade,
    )


_TONE_COLORS = {
    BalanceTone.POSITIVE: Fore.GREEN,
    BalanceTone.NEGATIVE: Fore.RED,
    BalanceTone.NEUTRAL: Fore.WHITE,
}


def _paint(text: str, color: str, enabled: bool) -> str:
    """Wrap text in an ANSI colour unless colouring is disabled."""
    if not enabled:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def render_card_text(view: CardView, color: bool = True) -> str:
    """Render a card view as plain terminal text."""
    if view.state is CardState.LOADING:
        return _paint(view.message, Fore.LIGHTBLACK_EX, color)

    if view.state is CardState.ERROR:
        return "\n".join([
            _paint(view.address, Fore.CYAN, color),
            _paint(view.message, Fore.RED, color),
        ])

    lines = [
        _paint(view.address, Fore.CYAN, color),
        f"Tradeable Balance: {view.available_balance}",
        "Total Balance: " + _paint(view.total_balance, _TONE_COLORS[view.balance_tone], color),
        "",
        "Open Positions",
    ]

    if view.rows:
        table = [
            [
                row.token,
                _paint(f"{row.size} {row.side}",
                       Fore.GREEN if row.side == PositionSide.LONG.value else Fore.RED,
                       color),
                row.entry_price,
                _paint(row.pnl, _TONE_COLORS[row.pnl_tone], color),
            ]
            for row in view.rows
        ]
        lines.append(tabulate(table, headers=POSITION_HEADERS, tablefmt="simple",
                              disable_numparse=True))
    else:
        lines.append(view.empty_message)

    if view.recent_trade is not None:
        trade = view.recent_trade
        lines.extend([
            "",
            f"Recent Trade Summary ({trade.symbol})",
            f"  Entry Price: {trade.entry_price}",
            f"  Close Price: {trade.close_price}",
            "  PnL: " + _paint(trade.pnl, _TONE_COLORS[trade.pnl_tone], color),
        ])

    return "\n".join(lines)
