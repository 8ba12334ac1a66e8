"""
다이어그램 픽스처 타입 정의

YAML 픽스처 테이블과 step-through 시퀀스의 레코드를 dataclass로 정의.
모든 레코드는 읽기 전용 (frozen).
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple


@dataclass(frozen=True)
class StepValue:
    """스텝 화면에 표시되는 라벨/값 한 줄"""
    label: str
    value: str

    @classmethod
    def from_dict(cls, data: dict) -> "StepValue":
        return cls(label=str(data["label"]), value=str(data["value"]))


@dataclass(frozen=True)
class Step:
    """step-through 다이어그램의 한 단계"""
    title: str
    description: str
    formula: str = ""
    values: Tuple[StepValue, ...] = field(default_factory=tuple)
    warning: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Step":
        return cls(
            title=data["title"],
            description=data["description"],
            formula=data.get("formula", ""),
            values=tuple(StepValue.from_dict(v) for v in data.get("values", [])),
            warning=data.get("warning"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BridgeHack:
    """브리지 해킹 사례"""
    name: str
    date: str
    loss_musd: int  # 손실액 (백만 USD)
    mechanism: str
    mechanism_tag: str
    detail: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "BridgeHack":
        return cls(
            name=data["name"],
            date=data["date"],
            loss_musd=int(data["loss_musd"]),
            mechanism=data["mechanism"],
            mechanism_tag=data["mechanism_tag"],
            detail=data.get("detail", ""),
        )


@dataclass(frozen=True)
class PriceFeed:
    """Chainlink price feed (Ethereum mainnet)"""
    pair: str
    address: str
    decimals: int
    heartbeat_s: int
    deviation_pct: float

    @classmethod
    def from_dict(cls, data: dict) -> "PriceFeed":
        return cls(
            pair=data["pair"],
            address=data["address"],
            decimals=int(data["decimals"]),
            heartbeat_s=int(data["heartbeat_s"]),
            deviation_pct=float(data["deviation_pct"]),
        )


@dataclass(frozen=True)
class ILReference:
    """IL 참고표 한 행 (가격 비율 r)"""
    r: float
    label: str

    @classmethod
    def from_dict(cls, data: dict) -> "ILReference":
        return cls(r=float(data["r"]), label=data["label"])


@dataclass(frozen=True)
class EcdsaDisplayValues:
    """ECDSA 다이어그램 표시용 값

    실제 secp256k1 연산 결과가 아니라 화면 표시를 위해 잘라낸 (truncated for display)
    가짜 값이다.
    """
    d: str
    h: str
    k: str
    r_x: str
    r_y: str
    r: str
    s: str
    u1: str
    u2: str

    @classmethod
    def from_dict(cls, data: dict) -> "EcdsaDisplayValues":
        return cls(**{name: str(data[name]) for name in cls.__dataclass_fields__})
