"""BinaryStore Interface"""

import io
import logging
from abc import ABC, abstractmethod
from collections import namedtuple
import importlib.metadata
import importlib.util
from binarystore.filebinarystore_exceptions import StreamCreationFailure


class BinaryStore(ABC):
    """BinaryStore is an id-addressed file management system that stores binary content
    without metadata. Each binary is addressed by an opaque identifier, which names the
    file and (once sharded) the directories the file is placed in."""

    @staticmethod
    def version():
        """Return the version number"""
        __version__ = importlib.metadata.version("binarystore")
        return __version__

    @abstractmethod
    def create(self, binary_id=None):
        """Create a binary and return a `Binary` handle ready to read from and write to. If no
        `binary_id` is given, a new id is produced by the store's id generator. If a binary
        already exists for the given id, it is reused as is (no uniqueness check).

        :param str binary_id: Id of the binary to create (optional).

        :return: Binary - Handle of the created binary.
        """
        raise NotImplementedError()

    @abstractmethod
    def get(self, binary_id):
        """Get the handle of an existing binary.

        :param str binary_id: Id of the binary.

        :raises BinaryNotFound: If no binary exists for the given id.

        :return: Binary - Handle of the binary.
        """
        raise NotImplementedError()

    @abstractmethod
    def exist(self, binary_id):
        """Check whether a binary exists for the given id. Never raises.

        :param str binary_id: Id of the binary.

        :return: bool - `True` if the binary exists.
        """
        raise NotImplementedError()

    @abstractmethod
    def delete(self, binary_id):
        """Delete the binary with the given id. Deletion is silent: failures are not raised
        and only reported through the return value.

        :param str binary_id: Id of the binary.

        :return: bool - `True` if the binary was deleted.
        """
        raise NotImplementedError()

    @abstractmethod
    def find_all(self):
        """Get the handles of all binaries available in the store.

        :return: set - Set of `Binary` handles.
        """
        raise NotImplementedError()

    def find_all_ids(self):
        """Get the ids of all binaries available in the store.

        :return: set - Set of binary ids.
        """
        return {binary.id for binary in self.find_all()}


class BinaryStoreFactory:
    """A factory class for creating `BinaryStore`-like objects.

    The `BinaryStoreFactory` class serves as a factory for creating `BinaryStore`-like
    objects, which are classes that implement the 'BinaryStore' abstract methods.

    This factory class provides a method to retrieve a `BinaryStore` object based on a given
    module (e.g., "binarystore.filebinarystore") and class name (e.g., "FileBinaryStore").
    """

    @staticmethod
    def get_binarystore(module_name, class_name, properties=None, id_generator=None):
        """Get a `BinaryStore`-like object based on the specified `module_name` and
        `class_name`.

        :param str module_name: Name of the package (e.g., "binarystore.filebinarystore").
        :param str class_name: Name of the class in the given module (e.g., "FileBinaryStore").
        :param dict properties: Desired BinaryStore properties. Example Properties Dictionary:
            {
                "store_path": "/var/filebinarystore",
                "store_depth": 3,
            }
        :param callable id_generator: Zero-argument callable producing new binary ids
            (optional).

        :return: BinaryStore - A binary store object based on the given `module_name` and
            `class_name`.

        :raises ModuleNotFoundError: If the module is not found.
        :raises AttributeError: If the class does not exist within the module.
        """
        # Validate module
        if importlib.util.find_spec(module_name) is None:
            raise ModuleNotFoundError(f"No module found for '{module_name}'")

        # Get BinaryStore
        imported_module = importlib.import_module(module_name)

        # If class is not part of module, raise error
        if hasattr(imported_module, class_name):
            binarystore_class = getattr(imported_module, class_name)
            return binarystore_class(properties=properties, id_generator=id_generator)
        raise AttributeError(
            f"Class name '{class_name}' is not an attribute of module '{module_name}'"
        )


class Binary(namedtuple("Binary", ["id", "path"])):
    """Handle of a binary stored on disk.

    A `Binary` pairs the id of a binary with the absolute path of its file. It does not
    cache content: every call to `get_input_stream` or `get_output_stream` opens a new
    stream on the file. The caller is responsible for closing every stream it receives.

    :param str id: Id of the binary.
    :param str path: Absolute path of the binary's file.
    """

    def get_input_stream(self):
        """Open a new stream to read the content of the binary.

        :raises StreamCreationFailure: If the file cannot be opened.

        :return: io.BufferedReader - Stream positioned at the start of the content.
        """
        return self._open("rb")

    def get_output_stream(self):
        """Open a new stream to write the content of the binary. Existing content is
        replaced, not appended to.

        :raises StreamCreationFailure: If the file cannot be opened.

        :return: io.BufferedWriter - Stream writing from the start of the file.
        """
        return self._open("wb")

    def _open(self, mode):
        try:
            # pylint: disable=W1514
            return io.open(self.path, mode)
        except OSError as err:
            exception_string = (
                f"Binary - _open: Unable to open stream ({mode}) for id: {self.id}"
                + f" at: {self.path}. {err}"
            )
            logging.error(exception_string)
            raise StreamCreationFailure(exception_string, errors=err) from err
