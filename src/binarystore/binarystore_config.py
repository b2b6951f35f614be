"""Default configuration variables for BinaryStore"""

############### Directory Structure ###############
# Amount of directories created when sharding a binary's id to form its location
DIR_DEPTH = 0  # WARNING: DO NOT CHANGE ON A STORE THAT ALREADY HOLDS BINARIES
# Width of directories created when sharding a binary's id
DIR_WIDTH = 3
# Example:
# Below, a binary is shown in directories that are 3 levels deep (DIR_DEPTH=3),
# with each directory consisting of 3 characters (DIR_WIDTH=3).
# Non-word characters of the id are skipped when building the directories only.
#    /var/filebinarystore
#    ├── 105
#    │   └── cbe
#    │       └── 4c4
#    │           └── 105cbe4c-49f8-450c-9245-0b611d25d80c

############### Configuration File ###############
# Suggested name of the YAML file given to the command line client with `-config`.
# Keep it outside of the store path: a flat store (DIR_DEPTH=0) would list it as a binary
CONFIG_FILE_NAME = "binarystore.yaml"
