import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from kingsbuy.constants import MAX_BUDGET, PIECES_PER_TYPE


def _int_in(d: Dict[str, Any], key: str, lo: int, hi: int) -> int:
    v = d[key]
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{key} must be an integer, got {v!r}")
    if not lo <= v <= hi:
        raise ValueError(f"{key} {v} outside {lo}..{hi}")
    return v


class BuyablePiece(Enum):
    JACK = "JACK"
    QUEEN = "QUEEN"
    KING = "KING"

    @staticmethod
    def parse(s: str) -> "BuyablePiece":
        return BuyablePiece(str(s).strip().upper())


@dataclass(frozen=True)
class BuyPolicyItem:
    piece_type: BuyablePiece
    piece_num: int   # which instance of the piece (1..4)
    budget: int      # highest card value we are willing to spend on it

    def __str__(self) -> str:
        return f"{self.piece_type.value}#{self.piece_num}@{self.budget}"

    def to_dict(self) -> Dict[str, Any]:
        return {"piece_type": self.piece_type.value, "piece_num": self.piece_num, "budget": self.budget}

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "BuyPolicyItem":
        return BuyPolicyItem(
            piece_type=BuyablePiece.parse(d["piece_type"]),
            piece_num=_int_in(d, "piece_num", 1, PIECES_PER_TYPE),
            budget=_int_in(d, "budget", 0, MAX_BUDGET),
        )


@dataclass(frozen=True)
class BuyPolicyConfig:
    """Priority table; earlier items are tried first."""
    priorities: tuple = ()

    def __post_init__(self):
        # accept any iterable but keep the stored value hashable
        object.__setattr__(self, "priorities", tuple(self.priorities))

    def __str__(self) -> str:
        return "[" + ", ".join(str(p) for p in self.priorities) + "]"

    def to_dict(self) -> Dict[str, Any]:
        return {"priorities": [p.to_dict() for p in self.priorities]}

    @staticmethod
    def from_obj(obj: Any) -> "BuyPolicyConfig":
        """Accepts {"priorities": [...]} or a bare list of items."""
        items = obj.get("priorities") if isinstance(obj, dict) else obj
        if not isinstance(items, list):
            raise ValueError(f"priority table must be a list, got {type(items).__name__}")
        return BuyPolicyConfig([BuyPolicyItem.from_dict(i) for i in items])


def _score(v: Any) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"score must be a number, got {v!r}")
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"score {v} outside 0..1")
    return float(v)


@dataclass
class PolicyEvalResult:
    policy: BuyPolicyConfig
    all_kings_policy: Optional[BuyPolicyConfig] = None
    score: float = 0.0
    times: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "policy": self.policy.to_dict(),
            "all_kings_policy": self.all_kings_policy.to_dict() if self.all_kings_policy else None,
            "score": self.score,
            "times": self.times,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PolicyEvalResult":
        ak = d.get("all_kings_policy")
        return PolicyEvalResult(
            policy=BuyPolicyConfig.from_obj(d["policy"]),
            all_kings_policy=BuyPolicyConfig.from_obj(ak) if ak is not None else None,
            score=_score(d["score"]),
            times=_int_in(d, "times", 0, sys.maxsize),
        )
