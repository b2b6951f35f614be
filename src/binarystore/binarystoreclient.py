"""BinaryStore Command Line App"""

import logging
import shutil
from argparse import ArgumentParser
from binarystore import BinaryStoreFactory
from binarystore.binarystore_config import CONFIG_FILE_NAME
from binarystore.filebinarystore import FileBinaryStore


class BinaryStoreParser:
    """Class to set up parsing arguments via argparse."""

    def __init__(self):
        """Initialize the argparse 'parser'."""

        program_name = "BinaryStore Command Line Client"
        description = (
            "Command line tool to store, retrieve, list and delete binaries in a"
            + " BinaryStore."
        )

        self.parser = ArgumentParser(
            prog=program_name,
            description=description,
        )

        # Add positional argument
        self.parser.add_argument(
            "store_path", nargs="?", default=None, help="Path of the BinaryStore"
        )

        # Add optional arguments
        self.parser.add_argument(
            "-loglevel",
            dest="logging_level",
            help="Set logging level for the client",
        )
        self.parser.add_argument(
            "-logfile",
            dest="logging_file",
            help="Write the client log to this file instead of stderr",
        )
        self.parser.add_argument(
            "-config",
            dest="config_path",
            help=f"Path of a BinaryStore configuration file (ex. {CONFIG_FILE_NAME})",
        )
        self.parser.add_argument(
            "-dp", "-store_depth", dest="depth", help="Depth of BinaryStore"
        )

        # Individual API call related optional arguments
        self.parser.add_argument(
            "-id",
            dest="binary_id",
            help="Id of the binary to work with",
        )
        self.parser.add_argument(
            "-path",
            dest="binary_path",
            help="Path of the file to store as a binary",
        )

        # Public API optional arguments
        self.parser.add_argument(
            "-storebinary",
            dest="client_storebinary",
            action="store_true",
            help="Flag to store a file as a binary in a BinaryStore",
        )
        self.parser.add_argument(
            "-retrievebinary",
            dest="client_retrievebinary",
            action="store_true",
            help="Flag to retrieve a binary from a BinaryStore",
        )
        self.parser.add_argument(
            "-exists",
            dest="client_exists",
            action="store_true",
            help="Flag to check whether a binary exists in a BinaryStore",
        )
        self.parser.add_argument(
            "-deletebinary",
            dest="client_deletebinary",
            action="store_true",
            help="Flag to delete a binary from a BinaryStore",
        )
        self.parser.add_argument(
            "-listids",
            dest="client_listids",
            action="store_true",
            help="Flag to list the ids of all binaries in a BinaryStore",
        )

    def get_parser_args(self, args=None):
        """Get command line arguments."""
        return self.parser.parse_args(args)


class BinaryStoreClient:
    """Create a BinaryStore to use through the command line."""

    def __init__(self, properties):
        """Initialize the BinaryStore of the client.

        :param dict properties: BinaryStore properties ('store_path', 'store_depth').
        """
        factory = BinaryStoreFactory()

        # Get BinaryStore from factory
        module_name = "binarystore.filebinarystore"
        class_name = "FileBinaryStore"

        self.binarystore = factory.get_binarystore(module_name, class_name, properties)
        logging.info("BinaryStoreClient - BinaryStore initialized.")

    def store_binary(self, path, binary_id=None):
        """Copy the content of a file into a binary, creating it if needed.

        :param str path: Path of the file to store.
        :param str binary_id: Id of the binary (optional, generated when not given).

        :return: Id of the stored binary.
        :rtype: str
        """
        binary = self.binarystore.create(binary_id)
        with open(path, "rb") as source, binary.get_output_stream() as target:
            shutil.copyfileobj(source, target)
        logging.info(
            "BinaryStoreClient - Stored %s as binary with id: %s", path, binary.id
        )
        return binary.id

    def retrieve_binary(self, binary_id, size=1000):
        """Read the first `size` bytes of a binary.

        :param str binary_id: Id of the binary.
        :param int size: Number of bytes to read.

        :return: Content of the binary, at most `size` bytes.
        :rtype: bytes
        """
        binary = self.binarystore.get(binary_id)
        with binary.get_input_stream() as stream:
            return stream.read(size)


def _load_client_properties(args):
    """Collect the BinaryStore properties from the configuration file and arguments.
    Command line arguments take precedence over the configuration file."""
    config_path = getattr(args, "config_path")
    store_path = getattr(args, "store_path")
    depth = getattr(args, "depth")

    if config_path is not None:
        props = FileBinaryStore.load_properties(config_path)
    else:
        props = {}

    if store_path is not None:
        props["store_path"] = store_path
    if depth is not None:
        props["store_depth"] = int(depth)
    if props.get("store_path") is None:
        raise ValueError(
            "Missing store path, supply 'store_path' or '-config'."
            + " Use `--help` for more information."
        )
    return props


def main(argv=None):
    """Entry point of the BinaryStore client."""

    parser = BinaryStoreParser()
    args = parser.get_parser_args(argv)

    # Setup logging
    logging_level_arg = getattr(args, "logging_level")
    if logging_level_arg is None:
        logging_level = "INFO"
    else:
        logging_level = logging_level_arg
    logging.basicConfig(
        filename=getattr(args, "logging_file"),
        level=logging_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Collect arguments to process
    binary_id = getattr(args, "binary_id")
    path = getattr(args, "binary_path")
    # Instantiate BinaryStore Client
    props = _load_client_properties(args)
    binarystore_c = BinaryStoreClient(props)

    if getattr(args, "client_storebinary"):
        if path is None:
            raise ValueError("'-path' option is required")
        stored_id = binarystore_c.store_binary(path, binary_id)
        print(f"Binary Id: {stored_id}")

    elif getattr(args, "client_retrievebinary"):
        if binary_id is None:
            raise ValueError("'-id' option is required")
        # Retrieve binary from BinaryStore and display the first 1000 bytes
        display_size = 1000
        binary_content = binarystore_c.retrieve_binary(binary_id, display_size)
        print(binary_content.decode("utf-8", errors="replace"))
        if len(binary_content) == display_size:
            print("...\n<-- Truncated for Display Purposes -->")

    elif getattr(args, "client_exists"):
        if binary_id is None:
            raise ValueError("'-id' option is required")
        exists = binarystore_c.binarystore.exist(binary_id)
        print(f"Binary Exists (T/F): {exists}")

    elif getattr(args, "client_deletebinary"):
        if binary_id is None:
            raise ValueError("'-id' option is required")
        delete_status = binarystore_c.binarystore.delete(binary_id)
        print(f"Binary Deleted (T/F): {delete_status}")

    elif getattr(args, "client_listids"):
        for listed_id in sorted(binarystore_c.binarystore.find_all_ids()):
            print(listed_id)


if __name__ == "__main__":
    main()
