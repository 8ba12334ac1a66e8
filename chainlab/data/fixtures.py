"""
Fixture loader

다이어그램에 하드코딩되어 있던 표시용 데이터를 버전이 붙은 YAML 테이블로
분리하고 시작 시 한 번 읽는다. 모든 테이블은 읽기 전용.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml

from .types import BridgeHack, PriceFeed, ILReference, EcdsaDisplayValues, Step

FIXTURE_DIR = Path(__file__).parent / "fixtures"
FIXTURE_VERSION = 1


@lru_cache(maxsize=None)
def load_fixture(name: str, fixture_dir: Optional[str] = None) -> dict:
    """<fixture_dir>/<name>.yaml 로드

    Raises:
        FileNotFoundError: 파일이 없는 경우
        ValueError: version 키가 없거나 지원하지 않는 버전
    """
    base = Path(fixture_dir) if fixture_dir else FIXTURE_DIR
    path = base / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"픽스처를 찾을 수 없습니다: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or data.get("version") != FIXTURE_VERSION:
        raise ValueError(
            f"지원하지 않는 픽스처 버전: {path.name} "
            f"(version={data.get('version') if isinstance(data, dict) else None})"
        )
    return data


def bridge_hacks(fixture_dir: Optional[str] = None) -> List[BridgeHack]:
    return [BridgeHack.from_dict(r) for r in load_fixture("bridge_hacks", fixture_dir)["records"]]


def price_feeds(fixture_dir: Optional[str] = None) -> List[PriceFeed]:
    return [PriceFeed.from_dict(r) for r in load_fixture("price_feeds", fixture_dir)["records"]]


def il_reference(fixture_dir: Optional[str] = None) -> List[ILReference]:
    return [ILReference.from_dict(r) for r in load_fixture("il_reference", fixture_dir)["records"]]


def ecdsa_display_values(fixture_dir: Optional[str] = None) -> EcdsaDisplayValues:
    """잘린 가짜 표시값 (실제 secp256k1 연산 결과 아님)"""
    return EcdsaDisplayValues.from_dict(load_fixture("ecdsa_display", fixture_dir)["values"])


def fixture_steps(name: str, fixture_dir: Optional[str] = None) -> List[Step]:
    """steps 키를 가진 픽스처를 Step 리스트로"""
    return [Step.from_dict(s) for s in load_fixture(name, fixture_dir)["steps"]]
