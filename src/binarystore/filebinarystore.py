"""Core module for FileBinaryStore"""

import os
import logging
import inspect
import uuid
import yaml
from binarystore.binarystore import Binary, BinaryStore
from binarystore.binarystore_config import DIR_DEPTH
from binarystore.filebinarystore_exceptions import (
    BinaryNotFound,
    InvalidConfiguration,
    StreamCreationFailure,
)
from binarystore.pathsharder import shard_path


def generate_id():
    """Default id generator, a random UUID in its canonical textual form."""
    return str(uuid.uuid4())


class FileBinaryStore(BinaryStore):
    """FileBinaryStore is a BinaryStore that persists binaries as files on the local file
    system. Binaries are addressed by their id, which is also the name of their file. To
    avoid too many files in a single directory, files are placed in a tree of directories
    derived from the id (see `binarystore.pathsharder.shard_path`).

    FileBinaryStore initializes using a given properties dictionary. Upon initialization,
    the store path is created if it does not exist yet and verified to be a readable and
    writable directory.

    :param dict properties: A Python dictionary with the following keys (and values):
        - store_path (str): Path to the BinaryStore directory.
        - store_depth (int): Number of directory levels when sharding a binary's id
          (optional, defaults to 0 - no sharding).
    :param callable id_generator: Zero-argument callable producing the ids of binaries
        created without an id (optional, defaults to random UUIDs).
    """

    # Property (binarystore configuration) requirements
    property_required_keys = ["store_path"]
    property_default_values = {"store_depth": DIR_DEPTH}
    # Permissions settings for creating directories
    dmode = 0o755

    def __init__(self, properties=None, id_generator=None):
        checked_properties = self._validate_properties(properties)
        store_path = checked_properties["store_path"]
        store_depth = checked_properties["store_depth"]
        logging.info(
            "FileBinaryStore - Initializing with store_depth %s in store path: %s",
            store_depth,
            store_path,
        )
        self._verify_store_path(store_path)

        self.root = os.path.abspath(store_path)
        self.depth = store_depth
        self.id_generator = id_generator or generate_id
        logging.debug(
            "FileBinaryStore - Initialization success. Store root: %s", self.root
        )

    # Configuration and Related Methods

    @staticmethod
    def load_properties(binarystore_yaml_path):
        """Get and return the properties found in a BinaryStore configuration file.

        :param str binarystore_yaml_path: Path to the YAML configuration file.

        :raises FileNotFoundError: If the configuration file does not exist.
        :raises KeyError: If 'store_path' is missing from the configuration file.

        :return: BinaryStore properties with the following keys (and values):
            - ``store_path`` (str): Path to the BinaryStore directory.
            - ``store_depth`` (int): Number of directory levels when sharding an id.
        :rtype: dict
        """
        if not os.path.exists(binarystore_yaml_path):
            exception_string = (
                "FileBinaryStore - load_properties: configuration file not found at:"
                + f" {binarystore_yaml_path}"
            )
            logging.critical(exception_string)
            raise FileNotFoundError(exception_string)

        # Open file
        with open(binarystore_yaml_path, "r", encoding="utf-8") as bs_yaml_file:
            yaml_data = yaml.safe_load(bs_yaml_file) or {}

        binarystore_yaml_dict = {}
        for key in FileBinaryStore.property_required_keys:
            if key not in yaml_data:
                exception_string = (
                    f"FileBinaryStore - load_properties: Missing required key: {key}"
                    + f" in: {binarystore_yaml_path}"
                )
                logging.critical(exception_string)
                raise KeyError(exception_string)
            binarystore_yaml_dict[key] = yaml_data[key]
        store_depth = yaml_data.get("store_depth", DIR_DEPTH)
        binarystore_yaml_dict["store_depth"] = int(store_depth)
        logging.debug(
            "FileBinaryStore - load_properties: Successfully retrieved properties from: %s",
            binarystore_yaml_path,
        )
        return binarystore_yaml_dict

    @staticmethod
    def write_properties(binarystore_yaml_path, properties):
        """Write a BinaryStore configuration file with the given properties.

        :param str binarystore_yaml_path: Path of the YAML configuration file to write.
        :param dict properties: BinaryStore properties ('store_path', 'store_depth').

        :raises FileExistsError: If a file already exists at the given path.
        """
        if os.path.exists(binarystore_yaml_path):
            exception_string = (
                "FileBinaryStore - write_properties: configuration file already exists at:"
                + f" {binarystore_yaml_path}"
            )
            logging.error(exception_string)
            raise FileExistsError(exception_string)

        binarystore_yaml_dict = {
            "store_path": str(properties["store_path"]),
            "store_depth": int(properties.get("store_depth", DIR_DEPTH)),
        }
        with open(binarystore_yaml_path, "w", encoding="utf-8") as bs_yaml_file:
            yaml.safe_dump(binarystore_yaml_dict, bs_yaml_file, default_flow_style=False)

        logging.debug(
            "FileBinaryStore - write_properties: Configuration file written to: %s",
            binarystore_yaml_path,
        )

    def _validate_properties(self, properties):
        """Validate a properties dictionary by checking that it contains all the required
        keys with non-None values and that the store depth is a non-negative integer.

        :param dict properties: Dictionary containing filebinarystore properties.

        :raises InvalidConfiguration: If a property is missing or invalid.

        :return: The given properties completed with default values.
        :rtype: dict
        """
        if not isinstance(properties, dict):
            exception_string = (
                "FileBinaryStore - _validate_properties: Invalid argument -"
                + f" expected a dictionary. Properties: {properties}"
            )
            logging.error(exception_string)
            raise InvalidConfiguration(exception_string)

        for key in self.property_required_keys:
            if properties.get(key) is None:
                exception_string = (
                    "FileBinaryStore - _validate_properties: Missing value for required"
                    + f" key: {key}."
                )
                logging.error(exception_string)
                raise InvalidConfiguration(exception_string)

        checked_properties = dict(self.property_default_values)
        checked_properties.update(
            {key: value for key, value in properties.items() if value is not None}
        )

        store_depth = checked_properties["store_depth"]
        if isinstance(store_depth, bool) or not isinstance(store_depth, int):
            exception_string = (
                "FileBinaryStore - _validate_properties: store_depth must be an integer."
                + f" store_depth: {store_depth}. Arg Type: {type(store_depth)}."
            )
            logging.error(exception_string)
            raise InvalidConfiguration(exception_string)
        if store_depth < 0:
            exception_string = (
                "FileBinaryStore - _validate_properties: store_depth must be >= 0."
                + f" store_depth: {store_depth}"
            )
            logging.error(exception_string)
            raise InvalidConfiguration(exception_string)
        return checked_properties

    def _verify_store_path(self, store_path):
        """Make sure the store path is a directory that can be read and written, creating
        it (and all intermediate directories) if it does not exist.

        :param str store_path: Path to the BinaryStore directory.

        :raises InvalidConfiguration: If the store path cannot be used.
        """
        if os.path.exists(store_path) and not os.path.isdir(store_path):
            exception_string = (
                f"FileBinaryStore - _verify_store_path: {store_path} is not a directory"
            )
            logging.critical(exception_string)
            raise InvalidConfiguration(exception_string)

        if not os.path.isdir(store_path):
            try:
                self._create_path(store_path)
            except OSError as err:
                exception_string = (
                    f"FileBinaryStore - _verify_store_path: {store_path} could not be"
                    + f" created. {err}"
                )
                logging.critical(exception_string)
                raise InvalidConfiguration(exception_string, errors=err) from err

        if not os.access(store_path, os.R_OK):
            exception_string = (
                f"FileBinaryStore - _verify_store_path: {store_path} cannot be read"
            )
            logging.critical(exception_string)
            raise InvalidConfiguration(exception_string)

        if not os.access(store_path, os.W_OK):
            exception_string = (
                f"FileBinaryStore - _verify_store_path: {store_path} cannot be written"
            )
            logging.critical(exception_string)
            raise InvalidConfiguration(exception_string)

    # Public API / BinaryStore Interface Methods

    def create(self, binary_id=None):
        if binary_id is None:
            binary_id = self.id_generator()
        logging.debug(
            "FileBinaryStore - create: Request to create binary for id: %s", binary_id
        )
        self._check_id(binary_id, "binary_id")

        binary_path = self._build_path(binary_id)
        binary_directory = os.path.dirname(binary_path)
        if not os.path.isdir(binary_directory):
            logging.debug("FileBinaryStore - create: Creating dirs %s", binary_directory)
            try:
                self._create_path(binary_directory)
            except OSError as err:
                exception_string = (
                    f"FileBinaryStore - create: Unable to create dirs {binary_directory}"
                    + f" for id: {binary_id}. {err}"
                )
                logging.error(exception_string)
                raise StreamCreationFailure(exception_string, errors=err) from err

        binary = self._map_binary(binary_id, binary_path)
        logging.info("FileBinaryStore - create: Created binary for id: %s", binary_id)
        return binary

    def get(self, binary_id):
        logging.debug(
            "FileBinaryStore - get: Request to get binary for id: %s", binary_id
        )
        self._check_id(binary_id, "binary_id")

        binary_path = self._resolve_path(binary_id)
        if binary_path is None:
            exception_string = (
                f"FileBinaryStore - get: Binary does not exist for id: {binary_id}"
            )
            logging.error(exception_string)
            raise BinaryNotFound(exception_string)
        return self._map_binary(binary_id, binary_path)

    def exist(self, binary_id):
        return self._resolve_path(binary_id) is not None

    def delete(self, binary_id):
        logging.debug(
            "FileBinaryStore - delete: Request to delete binary for id: %s", binary_id
        )
        binary_path = self._resolve_path(binary_id)
        if binary_path is None:
            logging.debug(
                "FileBinaryStore - delete: No binary found to delete for id: %s",
                binary_id,
            )
            return False

        try:
            os.remove(binary_path)
        except OSError as err:
            logging.error(
                "FileBinaryStore - delete: Unable to delete binary for id: %s. %s",
                binary_id,
                err,
            )
            return False
        logging.info("FileBinaryStore - delete: Deleted binary for id: %s", binary_id)
        return True

    def find_all(self):
        binaries = set()
        for binary_id in self.find_all_ids():
            try:
                binaries.add(self.get(binary_id))
            except (BinaryNotFound, StreamCreationFailure) as err:
                logging.error(
                    "FileBinaryStore - find_all: Failed to map binary for id: %s. %s",
                    binary_id,
                    err,
                )
        return binaries

    def find_all_ids(self):
        def raise_walk_error(err):
            raise err

        binary_ids = set()
        try:
            for _, _, files in os.walk(self.root, onerror=raise_walk_error):
                for filename in files:
                    # Only files found where their id is sharded to are binaries
                    if self.exist(filename):
                        binary_ids.add(filename)
        except OSError as err:
            logging.error(
                "FileBinaryStore - find_all_ids: Problem reading tree %s: %s",
                self.root,
                err,
            )
            return set()
        return binary_ids

    # FileBinaryStore Core Methods

    def _map_binary(self, binary_id, binary_path):
        """Build the handle of a binary, creating its (empty) file if it does not exist yet.

        :param str binary_id: Id of the binary.
        :param str binary_path: Absolute path of the binary's file.

        :raises StreamCreationFailure: If the file cannot be created.

        :return: Handle of the binary.
        :rtype: Binary
        """
        if not os.path.isfile(binary_path):
            try:
                with open(binary_path, "xb"):
                    pass
            except FileExistsError as err:
                # Created concurrently is fine, anything but a file is in the way
                if not os.path.isfile(binary_path):
                    exception_string = (
                        f"FileBinaryStore - _map_binary: Path for id: {binary_id} is"
                        + f" taken by something that is not a file: {binary_path}"
                    )
                    logging.error(exception_string)
                    raise StreamCreationFailure(exception_string, errors=err) from err
            except OSError as err:
                exception_string = (
                    f"FileBinaryStore - _map_binary: Failed to create file for id: {binary_id}"
                    + f" at: {binary_path}. {err}"
                )
                logging.error(exception_string)
                raise StreamCreationFailure(exception_string, errors=err) from err
        return Binary(binary_id, binary_path)

    def _resolve_path(self, binary_id):
        """Get the absolute path of the file of an existing binary. This is the single
        check used to decide whether a binary exists, both for lookups and when listing
        the store.

        :param str binary_id: Id of the binary.

        :return: Path to the binary's file, or None if there is no such regular file.
        :rtype: str
        """
        if not self._is_valid_id(binary_id):
            return None
        binary_path = self._build_path(binary_id)
        if os.path.isfile(binary_path):
            return binary_path
        return None

    def _build_path(self, binary_id):
        """Build the absolute file path of a binary: the store root, followed by the sharded
        directories of its id and the unmodified id as file name.

        :param str binary_id: Id of the binary.

        :return: An absolute file path for the specified id.
        :rtype: str
        """
        sharded_directories = shard_path(binary_id, self.depth)
        return os.path.join(self.root, sharded_directories, binary_id)

    def _create_path(self, path):
        """Physically create the folder path (and all intermediate ones) on disk.

        :param str path: The path to create.
        :raises NotADirectoryError: If the path already exists but is not a directory.
        """
        try:
            os.makedirs(path, self.dmode)
        except FileExistsError as err:
            if not os.path.isdir(path):
                raise NotADirectoryError(f"expected {path} to be a directory") from err

    # Other Static Methods

    @staticmethod
    def _is_valid_id(binary_id):
        """Whether a binary id can name a file inside the store: a non-blank string that
        contains no path separator and is not '.' or '..'.

        :param str binary_id: Id to check.

        :rtype: bool
        """
        if not isinstance(binary_id, str) or binary_id.strip() == "":
            return False
        if os.sep in binary_id or (os.altsep and os.altsep in binary_id):
            return False
        return binary_id not in (os.curdir, os.pardir)

    @staticmethod
    def _check_id(binary_id, arg):
        """Check whether a binary id is valid; throws an exception if not.

        :param str binary_id: Value to check.
        :param str arg: Name of the argument to check.
        """
        if not FileBinaryStore._is_valid_id(binary_id):
            method = inspect.stack()[1].function
            exception_string = (
                f"FileBinaryStore - {method}: {arg} cannot be None, empty or contain"
                + f" a path separator, {arg}: {binary_id}."
            )
            logging.error(exception_string)
            raise ValueError(exception_string)
