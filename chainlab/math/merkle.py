"""
Merkle Math - 머클 트리와 포함 증명

⚠️ display_hash 는 FNV-1a 32비트 + avalanche 한 라운드의 표시용 해시다.
SHA-256 이 아니므로 실제 블록 헤더의 머클 루트와 값이 다르다.

트리 구성 (Bitcoin 방식):
    leaves = [H(tx) for tx in txs]
    홀수 레벨은 마지막 노드를 복제해서 짝을 맞춘다
    parent = H(left || right)

증명 검증:
    current = leaf
    sibling 이 오른쪽이면 H(current || sibling), 왼쪽이면 H(sibling || current)
    마지막 current == root 이면 VALID
"""

from typing import List, NamedTuple, Sequence

from .commitment import fnv1a_32
from ..constants import MERKLE_MIX_MULTIPLIER, UINT32_MASK
from ..data.types import Step, StepValue


DEFAULT_TX_LABELS = ("tx1", "tx2", "tx3", "tx4", "tx5", "tx6", "tx7", "tx8")


class ProofElement(NamedTuple):
    """증명 경로의 형제 노드 하나"""
    hash: str
    direction: str      # 'left' | 'right' (형제가 놓이는 쪽)
    level: int
    sibling_index: int


class ProofCheck(NamedTuple):
    computed_root: str
    valid: bool
    trace: List[str]


def _utf16_units(text: str) -> List[int]:
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def display_hash(text: str) -> str:
    """표시용 해시 (8자리 hex)

    UTF-16 코드 유닛 단위 FNV-1a 후 avalanche 한 라운드.

    Example:
        >>> len(display_hash("tx1"))
        8
    """
    h = fnv1a_32(_utf16_units(text))
    h ^= h >> 16
    h = (h * MERKLE_MIX_MULTIPLIER) & UINT32_MASK
    h ^= h >> 16
    return f"{h:08x}"


def hash_concat(left: str, right: str) -> str:
    """H(left || right)"""
    return display_hash(left + right)


def build_merkle_tree(labels: Sequence[str]) -> List[List[str]]:
    """리프부터 루트까지 레벨 목록

    각 레벨은 복제 전 노드만 담는다 (5개 리프 → [5, 3, 2, 1]).

    Raises:
        ValueError: 리프가 없는 경우
    """
    if not labels:
        raise ValueError("머클 트리에는 최소 1개의 리프가 필요합니다")

    current = [display_hash(label) for label in labels]
    levels = [current]
    while len(current) > 1:
        if len(current) % 2 == 1:
            current = current + [current[-1]]
        current = [hash_concat(current[i], current[i + 1]) for i in range(0, len(current), 2)]
        levels.append(current)
    return levels


def merkle_root(labels: Sequence[str]) -> str:
    return build_merkle_tree(labels)[-1][0]


def get_merkle_proof(tree: List[List[str]], leaf_index: int) -> List[ProofElement]:
    """leaf_index 리프의 포함 증명 (형제 해시 목록, 리프 쪽부터)

    짝이 없는 마지막 노드는 자기 자신이 오른쪽 형제가 된다 (트리 구성 시 복제와 동일).

    Raises:
        IndexError: leaf_index 가 리프 범위를 벗어난 경우
    """
    leaf_count = len(tree[0])
    if not 0 <= leaf_index < leaf_count:
        raise IndexError(f"리프 인덱스가 범위를 벗어났습니다: {leaf_index} (0 ~ {leaf_count - 1})")

    proof = []
    idx = leaf_index
    for lvl, level in enumerate(tree[:-1]):
        if idx % 2 == 0:
            sib = idx + 1
            if sib < len(level):
                proof.append(ProofElement(level[sib], "right", lvl, sib))
            else:
                proof.append(ProofElement(level[idx], "right", lvl, idx))
        else:
            sib = idx - 1
            proof.append(ProofElement(level[sib], "left", lvl, sib))
        idx //= 2
    return proof


def verify_proof(leaf_hash: str, proof: Sequence[ProofElement], root: str) -> ProofCheck:
    """증명 경로를 따라 루트를 다시 계산하고 비교"""
    current = leaf_hash
    trace = [f"Start: {current}"]

    for elem in proof:
        if elem.direction == "right":
            nxt = hash_concat(current, elem.hash)
            trace.append(f"H({current} || {elem.hash}) = {nxt}")
        else:
            nxt = hash_concat(elem.hash, current)
            trace.append(f"H({elem.hash} || {current}) = {nxt}")
        current = nxt

    valid = current == root
    trace.append(f"Computed root: {current}")
    trace.append(f"Known root:    {root}")
    trace.append("VALID" if valid else "INVALID")
    return ProofCheck(computed_root=current, valid=valid, trace=trace)


def merkle_proof_steps(labels: Sequence[str] = DEFAULT_TX_LABELS, leaf_index: int = 2) -> List[Step]:
    """포함 증명 검증 step-through 레코드"""
    tree = build_merkle_tree(labels)
    root = tree[-1][0]
    leaf = tree[0][leaf_index]
    proof = get_merkle_proof(tree, leaf_index)

    steps = [
        Step(
            title="Leaf hash",
            description=f"Hash the transaction {labels[leaf_index]} to get the leaf.",
            formula=f"H({labels[leaf_index]}) = {leaf}",
            values=(
                StepValue("leaves", str(len(labels))),
                StepValue("proof size", str(len(proof))),
            ),
        )
    ]

    current = leaf
    for elem in proof:
        if elem.direction == "right":
            nxt = hash_concat(current, elem.hash)
            formula = f"H({current} || {elem.hash}) = {nxt}"
        else:
            nxt = hash_concat(elem.hash, current)
            formula = f"H({elem.hash} || {current}) = {nxt}"
        steps.append(Step(
            title=f"Level {elem.level}",
            description=f"Combine with the sibling on the {elem.direction} (index {elem.sibling_index}).",
            formula=formula,
            values=(StepValue("sibling", elem.hash), StepValue("parent", nxt)),
        ))
        current = nxt

    steps.append(Step(
        title="Compare with root",
        description="The proof is valid when the recomputed hash equals the known root.",
        formula=f"{current} == {root}",
        values=(StepValue("result", "VALID" if current == root else "INVALID"),),
    ))
    return steps
