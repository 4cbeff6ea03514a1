"""Action data builders for the BasicToken contract.

Each builder validates its arguments and returns the ``data`` mapping for one
contract action, with every quantity rendered through
:func:`~transeos.quantity.format_quantity`. Wrapping the data into a
transaction, signing and broadcasting are left to the caller's wallet.

The checks mirror the contract's own assertions (positive quantities, no
self-transfers, 256-byte memos) so that bad actions fail locally instead of on
chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .errors import ActionError
from .names import encode_name
from .quantity import RawValue, format_quantity, parse_quantity
from .symbols import encode_symbol_code

logger = logging.getLogger(__name__)

ACTION_NAMES = ("create", "issue", "transfer", "transferfrom", "approve")
MEMO_MAX_BYTES = 256
UINT64_MASK = (1 << 64) - 1


@dataclass
class Action:
    """A contract action ready to be handed to a wallet for signing."""

    account: str
    name: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"account": self.account, "name": self.name, "data": dict(self.data)}


def _require_account(value: Any, role: str) -> str:
    if not value:
        raise ActionError(f"No {role} account has been passed", value)
    if not isinstance(value, str):
        raise ActionError(f"The {role} account must be a string", value)
    encode_name(value)
    return value


def _require_symbol(symbol: Any) -> str:
    if not symbol:
        raise ActionError("No symbol has been passed", symbol)
    if not isinstance(symbol, str):
        raise ActionError("The symbol must be a string", symbol)
    encode_symbol_code(symbol)
    return symbol


def _positive_quantity(raw_value: RawValue, decimals: int, symbol: str, label: str) -> str:
    if raw_value is None or raw_value == "":
        raise ActionError(f"No {label} has been passed", raw_value)
    asset = format_quantity(raw_value, decimals, symbol)
    quantity = parse_quantity(asset)
    if not quantity.is_positive():
        raise ActionError(f"{label} must be positive (got {asset!r})", raw_value)
    if not quantity.is_valid():
        raise ActionError(f"{label} {asset!r} exceeds the maximum asset amount", raw_value)
    return asset


def _memo(memo: str | None, symbol: str) -> str:
    text = memo if memo else f"Issue {symbol}"
    if not isinstance(text, str):
        raise ActionError("The memo must be a string", memo)
    if len(text.encode("utf-8")) > MEMO_MAX_BYTES:
        raise ActionError(f"memo has more than {MEMO_MAX_BYTES} bytes", memo)
    return text


def build_create(issuer: str, max_supply: RawValue, decimals: int, symbol: str) -> Dict[str, Any]:
    """Data for ``create``: register ``symbol`` with ``issuer`` and a maximum supply."""

    _require_account(issuer, "issuer")
    _require_symbol(symbol)
    data = {
        "issuer": issuer,
        "max_supply": _positive_quantity(max_supply, decimals, symbol, "maximum supply"),
    }
    logger.debug("create data: %s", data)
    return data


def build_issue(
    to: str, quantity: RawValue, decimals: int, symbol: str, memo: str | None = None
) -> Dict[str, Any]:
    """Data for ``issue``: mint ``quantity`` to ``to`` (signed by the issuer)."""

    _require_account(to, "destination")
    _require_symbol(symbol)
    data = {
        "to": to,
        "quantity": _positive_quantity(quantity, decimals, symbol, "quantity"),
        "memo": _memo(memo, symbol),
    }
    logger.debug("issue data: %s", data)
    return data


def build_transfer(
    sender: str,
    to: str,
    quantity: RawValue,
    decimals: int,
    symbol: str,
    memo: str | None = None,
) -> Dict[str, Any]:
    """Data for ``transfer``: move tokens on the authority of ``sender``."""

    _require_account(sender, "source")
    _require_account(to, "destination")
    _require_symbol(symbol)
    if sender == to:
        raise ActionError("cannot transfer to self", sender)
    data = {
        "from": sender,
        "to": to,
        "quantity": _positive_quantity(quantity, decimals, symbol, "quantity"),
        "memo": _memo(memo, symbol),
    }
    logger.debug("transfer data: %s", data)
    return data


def build_transferfrom(
    sender: str,
    to: str,
    spender: str,
    quantity: RawValue,
    decimals: int,
    symbol: str,
    memo: str | None = None,
) -> Dict[str, Any]:
    """Data for ``transferfrom``: ``spender`` moves tokens out of ``sender``.

    ``sender`` must have approved ``spender`` beforehand; the allowance lives in
    the ``allowed`` table under :func:`allowance_key`.
    """

    _require_account(sender, "source")
    _require_account(to, "destination")
    _require_account(spender, "spender")
    _require_symbol(symbol)
    if sender == to:
        raise ActionError("cannot transfer to self", sender)
    data = {
        "from": sender,
        "to": to,
        "spender": spender,
        "quantity": _positive_quantity(quantity, decimals, symbol, "quantity"),
        "memo": _memo(memo, symbol),
    }
    logger.debug("transferfrom data: %s", data)
    return data


def build_approve(
    owner: str, spender: str, quantity: RawValue, decimals: int, symbol: str
) -> Dict[str, Any]:
    """Data for ``approve``: let ``spender`` move up to ``quantity`` of ``owner``'s tokens."""

    _require_account(owner, "owner")
    _require_account(spender, "spender")
    _require_symbol(symbol)
    if owner == spender:
        raise ActionError("cannot allow self", owner)
    data = {
        "owner": owner,
        "spender": spender,
        "quantity": _positive_quantity(quantity, decimals, symbol, "quantity"),
    }
    logger.debug("approve data: %s", data)
    return data


def allowance_key(spender: str, symbol: str) -> int:
    """Primary key of an ``allowed`` table row.

    The contract keys allowances by the 64-bit sum of the spender's name value
    and the symbol code value, wrapping on overflow. Rows live in the owner's
    scope.
    """

    _require_account(spender, "spender")
    return (encode_name(spender) + encode_symbol_code(_require_symbol(symbol))) & UINT64_MASK


_BUILDERS = {
    "create": build_create,
    "issue": build_issue,
    "transfer": build_transfer,
    "transferfrom": build_transferfrom,
    "approve": build_approve,
}


class ActionBuilder:
    """Build complete :class:`Action` records for one deployed contract.

    ``currencies`` maps symbol codes to their precision so callers may omit
    ``decimals`` for known currencies.
    """

    def __init__(self, contract: str, currencies: Mapping[str, int] | None = None) -> None:
        self.contract = _require_account(contract, "contract")
        self.currencies: Dict[str, int] = dict(currencies or {})

    @classmethod
    def from_config(cls, config: Any) -> "ActionBuilder":
        """Instantiate from a :class:`~transeos.config.TokenConfig`."""

        return cls(config.contract, config.currencies)

    def _decimals(self, symbol: str, decimals: int | None) -> int:
        if decimals is not None:
            known = self.currencies.get(symbol)
            if known is not None and known != decimals:
                logger.warning(
                    "decimals=%s for %s differs from configured precision %s", decimals, symbol, known
                )
            return decimals
        if symbol in self.currencies:
            return self.currencies[symbol]
        raise ActionError(
            f"No decimals has been passed and {symbol!r} is not a configured currency", symbol
        )

    def build(self, name: str, **kwargs: Any) -> Action:
        """Build action ``name`` from keyword arguments matching its builder."""

        builder = _BUILDERS.get(name)
        if builder is None:
            raise ActionError(f"Unknown action {name!r}; expected one of {', '.join(ACTION_NAMES)}", name)
        symbol = kwargs.get("symbol")
        kwargs["decimals"] = self._decimals(_require_symbol(symbol), kwargs.get("decimals"))
        data = builder(**kwargs)
        logger.info("Built %s action for contract %s", name, self.contract)
        return Action(account=self.contract, name=name, data=data)

    def create(
        self, issuer: str, max_supply: RawValue, symbol: str, decimals: int | None = None
    ) -> Action:
        return self.build(
            "create", issuer=issuer, max_supply=max_supply, decimals=decimals, symbol=symbol
        )

    def issue(
        self,
        to: str,
        quantity: RawValue,
        symbol: str,
        decimals: int | None = None,
        memo: str | None = None,
    ) -> Action:
        return self.build(
            "issue", to=to, quantity=quantity, decimals=decimals, symbol=symbol, memo=memo
        )

    def transfer(
        self,
        sender: str,
        to: str,
        quantity: RawValue,
        symbol: str,
        decimals: int | None = None,
        memo: str | None = None,
    ) -> Action:
        return self.build(
            "transfer",
            sender=sender,
            to=to,
            quantity=quantity,
            decimals=decimals,
            symbol=symbol,
            memo=memo,
        )

    def transferfrom(
        self,
        sender: str,
        to: str,
        spender: str,
        quantity: RawValue,
        symbol: str,
        decimals: int | None = None,
        memo: str | None = None,
    ) -> Action:
        return self.build(
            "transferfrom",
            sender=sender,
            to=to,
            spender=spender,
            quantity=quantity,
            decimals=decimals,
            symbol=symbol,
            memo=memo,
        )

    def approve(
        self,
        owner: str,
        spender: str,
        quantity: RawValue,
        symbol: str,
        decimals: int | None = None,
    ) -> Action:
        return self.build(
            "approve", owner=owner, spender=spender, quantity=quantity, decimals=decimals, symbol=symbol
        )
