"""Test module for BinaryStore's BinaryStoreFactory and Binary class."""

import os
import re
import pytest
import binarystore
from binarystore.binarystore import Binary, BinaryStore, BinaryStoreFactory
from binarystore.filebinarystore import FileBinaryStore


@pytest.fixture(name="factory")
def init_factory():
    """Create factory for all tests."""
    factory = BinaryStoreFactory()
    return factory


def test_init(factory):
    """Check BinaryStore Factory exists."""
    assert isinstance(factory, BinaryStoreFactory)


def test_factory_get_binarystore_filebinarystore(factory, props):
    """Check factory creates instance of FileBinaryStore."""
    module_name = "binarystore.filebinarystore"
    class_name = "FileBinaryStore"
    # These props can be found in tests/conftest.py
    store = factory.get_binarystore(module_name, class_name, props)
    assert isinstance(store, FileBinaryStore)
    assert isinstance(store, BinaryStore)
    assert store.depth == props["store_depth"]


def test_factory_get_binarystore_id_generator(factory, props):
    """Check factory passes the id generator to the store."""
    module_name = "binarystore.filebinarystore"
    class_name = "FileBinaryStore"
    store = factory.get_binarystore(
        module_name, class_name, props, id_generator=lambda: "generated-id"
    )
    assert store.create().id == "generated-id"


def test_factory_get_binarystore_unsupported_class(factory):
    """Check that AttributeError is raised when provided with unsupported class."""
    with pytest.raises(AttributeError):
        module_name = "binarystore.filebinarystore"
        class_name = "S3BinaryStore"
        factory.get_binarystore(module_name, class_name)


def test_factory_get_binarystore_unsupported_module(factory):
    """Check that ModuleNotFoundError is raised when provided with unsupported module."""
    with pytest.raises(ModuleNotFoundError):
        module_name = "binarystore.s3binarystore"
        class_name = "FileBinaryStore"
        factory.get_binarystore(module_name, class_name)


def test_binary():
    """Test class returns correct values via dot notation"""
    binary = Binary("binarystoretest", "/abs/path/to/binarystoretest")
    assert binary.id == "binarystoretest"
    assert binary.path == "/abs/path/to/binarystoretest"


def test_binary_equality():
    """Test handles of the same binary are equal and hash the same."""
    first = Binary("binarystoretest", "/abs/path/to/binarystoretest")
    second = Binary("binarystoretest", "/abs/path/to/binarystoretest")
    assert first == second
    assert len({first, second}) == 1


def test_find_all_ids_default_uses_find_all():
    """Test the default find_all_ids collects the ids of find_all."""

    class ListedStore(BinaryStore):
        """BinaryStore with a fixed set of binaries."""

        def create(self, binary_id=None):
            raise NotImplementedError()

        def get(self, binary_id):
            raise NotImplementedError()

        def exist(self, binary_id):
            return binary_id in ("a", "b")

        def delete(self, binary_id):
            return False

        def find_all(self):
            return {Binary("a", "/a"), Binary("b", "/b")}

    assert ListedStore().find_all_ids() == {"a", "b"}


def test_package_version_matches_setup():
    """Confirm the package version and the distribution version in setup.py agree."""
    setup_path = os.path.join(os.path.dirname(__file__), os.pardir, "setup.py")
    with open(setup_path, "r", encoding="utf-8") as setup_file:
        match = re.search(r'version="([^"]+)"', setup_file.read())
    assert match is not None
    assert match.group(1) == binarystore.__version__
