import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from chunkseal.crypto.aead import AeadAlgorithm, AeadKey  # noqa: E402
from chunkseal.stream.params import StreamParameters  # noqa: E402


@pytest.fixture(params=list(AeadAlgorithm), ids=lambda alg: alg.value)
def algorithm(request: pytest.FixtureRequest) -> AeadAlgorithm:
    return request.param


@pytest.fixture
def key(algorithm: AeadAlgorithm) -> AeadKey:
    return AeadKey.generate(algorithm)


@pytest.fixture
def small_params(algorithm: AeadAlgorithm) -> StreamParameters:
    return StreamParameters.generate(algorithm, chunk_size=4)
