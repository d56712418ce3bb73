import pytest
import torch

from bemeval.parameters import MAX_THREAD_COUNT_KEY, MODE_KEY, VERBOSITY_LEVEL_KEY


@pytest.fixture(scope="function")
def restore_torch_threads():
    prev_threads = torch.get_num_threads()
    yield prev_threads
    torch.set_num_threads(prev_threads)


@pytest.fixture(scope="module")
def nested_params():
    return {
        "options": {
            "assembly": {"potentialOperatorAssemblyType": "hmat"},
            "global": {"maxThreadCount": 3, "verbosityLevel": "high"},
        }
    }


@pytest.fixture(scope="module")
def flat_params():
    return {
        MODE_KEY: "hmat",
        MAX_THREAD_COUNT_KEY: 3,
        VERBOSITY_LEVEL_KEY: "high",
    }
