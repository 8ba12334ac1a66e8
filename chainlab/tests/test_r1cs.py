"""
R1CS 테스트

x^3 + x + 5 = 35 회로 (x = 3)
"""

import pytest

from ..math.r1cs import (
    R1CS,
    cubic_example,
    cubic_witness,
    circuit_trace,
    is_valid_witness,
    r1cs_steps,
)


class TestR1CS:
    """R1CS.evaluate 테스트"""

    def test_dimensions(self):
        system = cubic_example()
        assert system.num_constraints == 3
        assert system.num_variables == 5

    def test_valid_witness(self):
        system = cubic_example()
        witness = cubic_witness(3)
        assert witness == [1, 3, 9, 27, 35]

        checks = system.evaluate(witness)
        assert [(c.a, c.b, c.c) for c in checks] == [(3, 3, 9), (9, 3, 27), (35, 1, 35)]
        assert system.is_satisfied(witness)

    def test_wrong_output(self):
        """출력만 틀리면 마지막 제약만 실패"""
        checks = cubic_example().evaluate([1, 3, 9, 27, 36])
        assert [c.satisfied for c in checks] == [True, True, False]

    def test_witness_length(self):
        with pytest.raises(ValueError):
            cubic_example().evaluate([1, 3, 9])

    def test_inconsistent_matrices(self):
        with pytest.raises(ValueError):
            R1CS(A=((1, 0),), B=((1, 0),), C=())
        with pytest.raises(ValueError):
            R1CS(A=((1, 0),), B=((1, 0, 0),), C=((1, 0),))

    def test_modulus(self):
        """유한체 위에서는 35 ≡ 42 (mod 7)"""
        system = cubic_example(modulus=7)
        assert system.is_satisfied(cubic_witness(3))
        assert system.is_satisfied([1, 3, 9, 27, 42])
        assert not cubic_example().is_satisfied([1, 3, 9, 27, 42])


class TestCircuit:
    """산술 회로 테스트"""

    def test_trace(self):
        gates = circuit_trace(3)
        assert [g.value for g in gates] == [3, 9, 27, 30, 35]
        assert [g.op for g in gates] == ["INPUT", "MUL", "MUL", "ADD", "ADD"]

    def test_valid_witness(self):
        assert is_valid_witness(3)
        assert not is_valid_witness(4)
        assert is_valid_witness(4, target=4 ** 3 + 4 + 5)

    def test_steps(self):
        steps = r1cs_steps(3)
        assert len(steps) == 5
        assert steps[0].values[0].value == "[1, 3, 9, 27, 35]"
        assert steps[-1].values[1].value == "True"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
