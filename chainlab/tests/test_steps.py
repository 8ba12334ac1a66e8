"""
Step-through 시퀀스 테스트
"""

import shutil

import pytest
import yaml

from ..data.fixtures import FIXTURE_DIR
from ..data.types import Step
from ..diagrams.steps import StepSequence, StepCursor, list_sequences, get_sequence


class TestStepCursor:
    """StepCursor 전이 테스트"""

    def test_initial(self):
        cursor = StepCursor(length=3)
        assert cursor.current == 0
        assert cursor.can_forward
        assert not cursor.can_back

    def test_forward_back(self):
        cursor = StepCursor(length=3).forward().forward()
        assert cursor.current == 2
        assert cursor.history == (0, 1, 2)
        assert cursor.back().current == 1

    def test_forward_at_end_is_noop(self):
        cursor = StepCursor(length=2).forward()
        assert cursor.forward() == cursor

    def test_back_at_start_is_noop(self):
        cursor = StepCursor(length=2)
        assert cursor.back() == cursor

    def test_immutable(self):
        cursor = StepCursor(length=3)
        cursor.forward()
        assert cursor.current == 0

    def test_reset(self):
        cursor = StepCursor(length=4).forward().forward().reset()
        assert cursor.history == (0,)

    def test_jump(self):
        cursor = StepCursor(length=5).jump(3)
        assert cursor.current == 3
        assert cursor.back().current == 0
        assert cursor.jump(3) == cursor

    def test_jump_out_of_range(self):
        with pytest.raises(IndexError):
            StepCursor(length=5).jump(5)
        with pytest.raises(IndexError):
            StepCursor(length=5).jump(-1)


class TestStepSequence:
    """StepSequence / 레지스트리 테스트"""

    def test_empty(self):
        with pytest.raises(ValueError):
            StepSequence(name="empty", steps=())

    def test_indexing(self):
        steps = (Step(title="a", description="first"), Step(title="b", description="second"))
        sequence = StepSequence(name="two", steps=steps)
        assert len(sequence) == 2
        assert sequence[1].title == "b"
        assert sequence.cursor().length == 2

    def test_registry(self):
        assert list_sequences() == [
            "ecdsa_signing", "euclid_gcd", "liquidation", "merkle_proof",
            "mod_pow", "r1cs_matrix", "rsa_keygen", "v2_swap",
        ]

    @pytest.mark.parametrize("name,length", [
        ("rsa_keygen", 5),
        ("r1cs_matrix", 5),
        ("v2_swap", 6),
        ("liquidation", 5),
        ("ecdsa_signing", 6),
        ("mod_pow", 6),
        ("euclid_gcd", 4),
        ("merkle_proof", 5),
    ])
    def test_get_sequence(self, name, length):
        sequence = get_sequence(name)
        assert sequence.name == name
        assert len(sequence) == length

    def test_walk_to_end(self):
        sequence = get_sequence("v2_swap")
        cursor = sequence.cursor()
        while cursor.can_forward:
            cursor = cursor.forward()
        assert cursor.current == len(sequence) - 1

    def test_unknown(self):
        with pytest.raises(KeyError):
            get_sequence("nope")

    def test_fixture_dir(self, tmp_path):
        """픽스처 기반 시퀀스는 fixture_dir 의 YAML 을 읽는다"""
        shutil.copytree(FIXTURE_DIR, tmp_path, dirs_exist_ok=True)
        path = tmp_path / "ecdsa_signing.yaml"
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        data["steps"] = data["steps"][:2]
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True)

        assert len(get_sequence("ecdsa_signing", str(tmp_path))) == 2
        assert len(get_sequence("ecdsa_signing")) == 6

    def test_computed_sequence_ignores_fixture_dir(self, tmp_path):
        assert get_sequence("mod_pow", str(tmp_path)) == get_sequence("mod_pow")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
