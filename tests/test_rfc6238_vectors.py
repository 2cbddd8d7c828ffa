import hashlib
from datetime import datetime, timezone

import pytest

from totpgen import Generator, HashAlgorithm, new_sha1, new_sha256, new_sha512

SEED_SHA1 = b"12345678901234567890"
SEED_SHA256 = b"12345678901234567890123456789012"
SEED_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"

# RFC 6238 Appendix B
VECTORS = [
    (59, "94287082", "46119246", "90693936"),
    (1111111109, "07081804", "68084774", "25091201"),
    (1111111111, "14050471", "67062674", "99943326"),
    (1234567890, "89005924", "91819424", "93441116"),
    (2000000000, "69279037", "90698825", "38618901"),
    (20000000000, "65353130", "77737706", "47863826"),
]

CASES = [
    (HashAlgorithm.SHA1, SEED_SHA1, 1),
    (HashAlgorithm.SHA256, SEED_SHA256, 2),
    (HashAlgorithm.SHA512, SEED_SHA512, 3),
]


@pytest.mark.parametrize("algorithm,seed,column", CASES)
@pytest.mark.parametrize("row", VECTORS, ids=[str(v[0]) for v in VECTORS])
def test_eight_digit_vectors(algorithm, seed, column, row):
    generator = Generator(seed, digits=8, algorithm=algorithm)
    assert generator.at(row[0]) == row[column]


@pytest.mark.parametrize(
    "factory,seed,column",
    [(new_sha1, SEED_SHA1, 1), (new_sha256, SEED_SHA256, 2), (new_sha512, SEED_SHA512, 3)],
)
@pytest.mark.parametrize("row", VECTORS, ids=[str(v[0]) for v in VECTORS])
def test_six_digit_codes_are_low_digits_of_vectors(factory, seed, column, row):
    assert factory(seed).at(row[0]) == row[column][-6:]


def test_sha1_known_answers():
    generator = new_sha1(SEED_SHA1)
    assert generator.at(59) == "287082"
    assert generator.at(1111111109) == "081804"
    assert generator.counter(59) == 1
    assert generator.counter(1111111109) == 37037036


def test_datetime_and_seconds_agree():
    generator = new_sha1(SEED_SHA1)
    when = datetime(2005, 3, 18, 1, 58, 29, tzinfo=timezone.utc)
    assert generator.at(when) == generator.at(1111111109) == "081804"


def test_hash_constructor_as_algorithm():
    generator = Generator(SEED_SHA256, digits=8, algorithm=hashlib.sha256)
    assert generator.at(59) == "46119246"


def test_algorithm_by_name():
    generator = Generator(SEED_SHA512, digits=8, algorithm="SHA-512")
    assert generator.at(1234567890) == "93441116"


@pytest.mark.parametrize(
    "algorithm,size",
    [(HashAlgorithm.SHA1, 20), (HashAlgorithm.SHA256, 32), (HashAlgorithm.SHA512, 64)],
)
def test_digest_sizes(algorithm, size):
    assert algorithm.digest_size == size
    assert Generator(b"k", algorithm=algorithm).config.digest_size == size
    assert algorithm.factory().digest_size == size
