"""Pytest overall configuration file for fixtures"""

import pytest
from binarystore.filebinarystore import FileBinaryStore


@pytest.fixture(name="props")
def init_props(tmp_path):
    """Properties to initialize BinaryStore."""
    directory = tmp_path / "binaries" / "binarystore"
    directory.mkdir(parents=True)
    binarystore_path = directory.as_posix()
    # Note, binaries generated via tests are placed in a temporary folder
    # with the 'directory' parameter above appended
    properties = {
        "store_path": binarystore_path,
        "store_depth": 3,
    }
    return properties


@pytest.fixture(name="store")
def init_store(props):
    """Create FileBinaryStore instance for all tests."""
    store = FileBinaryStore(props)
    return store


@pytest.fixture(name="ids")
def init_ids():
    """Shared test harness data.
    - shard_path: expected sharded directories of the id for a store depth of 3
    """
    test_ids = {
        "105cbe4c-49f8-450c-9245-0b611d25d80c": {
            "shard_path": "105/cbe/4c4/",
        },
        "urn:uuid:1b35d0a5-b17a-423b-a2ed-de2b18dc367a": {
            "shard_path": "urn/uui/d1b/",
        },
        "jtao.1700.1": {
            "shard_path": "jta/o17/001/",
        },
    }
    return test_ids
