"""
RSA Math - 교과서 RSA

작은 소수로 키 생성/암호화/서명 과정을 보여주는 교육용 구현.
패딩이 없는 textbook RSA이므로 실제 사용 불가.

핵심 공식:
    n = p × q
    phi(n) = (p - 1)(q - 1)
    d = e^(-1) mod phi(n)
    c = m^e mod n,  m = c^d mod n
"""

from dataclasses import dataclass
from typing import List

from .modular import mod_pow, mod_inverse, is_prime
from ..data.types import Step, StepValue


@dataclass(frozen=True)
class RSAKeyPair:
    """RSA 키 쌍 (공개키: (n, e), 개인키: d)"""
    p: int
    q: int
    n: int
    phi: int
    e: int
    d: int


def generate_keypair(p: int, q: int, e: int) -> RSAKeyPair:
    """p, q, e로 RSA 키 생성

    Raises:
        ValueError: p, q가 소수가 아니거나 같은 경우
        NoInverseError: gcd(e, phi) != 1
    """
    if not is_prime(p) or not is_prime(q):
        raise ValueError(f"p, q는 소수여야 합니다: p={p}, q={q}")
    if p == q:
        raise ValueError("p와 q는 서로 달라야 합니다")

    n = p * q
    phi = (p - 1) * (q - 1)
    d = mod_inverse(e, phi)
    return RSAKeyPair(p=p, q=q, n=n, phi=phi, e=e, d=d)


def _check_range(value: int, key: RSAKeyPair) -> None:
    if value < 0 or value >= key.n:
        raise ValueError(f"값은 [0, {key.n}) 범위여야 합니다: {value}")


def encrypt(message: int, key: RSAKeyPair) -> int:
    """c = m^e mod n"""
    _check_range(message, key)
    return mod_pow(message, key.e, key.n)


def decrypt(ciphertext: int, key: RSAKeyPair) -> int:
    """m = c^d mod n"""
    _check_range(ciphertext, key)
    return mod_pow(ciphertext, key.d, key.n)


def sign(message_hash: int, key: RSAKeyPair) -> int:
    """s = h^d mod n"""
    _check_range(message_hash, key)
    return mod_pow(message_hash, key.d, key.n)


def verify(message_hash: int, signature: int, key: RSAKeyPair) -> bool:
    """s^e mod n == h"""
    _check_range(signature, key)
    return mod_pow(signature, key.e, key.n) == message_hash % key.n


def keygen_steps(p: int, q: int, e: int) -> List[Step]:
    """키 생성 step-through 레코드"""
    key = generate_keypair(p, q, e)
    return [
        Step(
            title="Step 1: choose primes p and q",
            description="Two distinct primes. Real RSA uses primes of 1024+ bits.",
            formula=f"p = {key.p}, q = {key.q}",
            values=(StepValue("p", str(key.p)), StepValue("q", str(key.q))),
        ),
        Step(
            title="Step 2: compute n = p * q",
            description="The modulus n is public; factoring it breaks the key.",
            formula="n = p × q",
            values=(StepValue("n", f"{key.p} × {key.q} = {key.n}"),),
        ),
        Step(
            title="Step 3: compute Euler's phi(n)",
            description="phi(n) counts the units modulo n.",
            formula="phi(n) = (p - 1)(q - 1)",
            values=(StepValue("phi", f"{key.p - 1} × {key.q - 1} = {key.phi}"),),
        ),
        Step(
            title="Step 4: choose public exponent e",
            description="e must be coprime with phi(n).",
            formula="gcd(e, phi(n)) = 1",
            values=(StepValue("e", str(key.e)),),
        ),
        Step(
            title="Step 5: compute private exponent d",
            description="d is the modular inverse of e via the extended Euclidean algorithm.",
            formula="d = e^(-1) mod phi(n)",
            values=(
                StepValue("d", str(key.d)),
                StepValue("check", f"{key.e} × {key.d} mod {key.phi} = {(key.e * key.d) % key.phi}"),
            ),
        ),
    ]
