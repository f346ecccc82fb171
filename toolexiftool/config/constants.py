"""
Constants shared across toolexiftool
"""

VERSION = "1.0.0"

EXIFTOOL_DEFAULT_EXECUTABLE = "exiftool"

# -j: JSON, -G4: copy-number group in keys, -l: long (desc/val/num),
# -D: tag IDs, -t: tag table names
EXIFTOOL_READ_ARGS = ["-j", "-G4", "-l", "-D", "-t"]
EXIFTOOL_RECURSIVE_ARG = "-r"
EXIFTOOL_BINARY_ARG = "-b"

TAG_DOCS_URL = "https://exiftool.org/TagNames/{family}.html"
TAG_DOCS_FAMILY_ALIASES = {
    'Exif': 'EXIF',
}

# Family filter syntax: <<Family::Subfamily>>
FAMILY_FILTER_PREFIX = "<<"
FAMILY_FILTER_SUFFIX = ">>"
FAMILY_SEPARATOR = "::"

BINARY_MARKER = "bytes"
DEFAULT_BINARY_EXTENSION = "jpeg"
DEFAULT_DOWNLOAD_SUBDIR = "Downloads"

ENV_EXIFTOOL = "TOOLEXIFTOOL_EXIFTOOL"
ENV_DOWNLOAD_DIR = "TOOLEXIFTOOL_DOWNLOAD_DIR"
ENV_MAX_WORKERS = "TOOLEXIFTOOL_MAX_WORKERS"

DEFAULT_LOG_FILE = "toolexiftool.log"

# Status messages shown in the footer
MSG_COPIED_VALUE = "Succesfully copied value to clipboard"
MSG_COPIED_NUMERICAL = "Succesfully copied numerical value to clipboard"
MSG_COPIED_ENTRY = "Succesfully copied entry data to clipboard"
MSG_NO_BINARY = "Selected entry does not contain any binary data!"
MSG_SAVED = "Succesfully saved at {path}"
MSG_SAVE_HINT = "File will be saved in Downloads. You probably want a .jpeg."
MSG_ENTER_NAME = "Please enter a name."
MSG_ENTER_EXTENSION = "Please enter an extension."
MSG_FILE_EXISTS = "File with this name already exists!"

# Viewer layout
SCROLL_PAGE = 4
MIN_SCROLL_TAIL = 5
MIN_TAB_WIDTH = 6
DETAILS_LONG_FACTOR = 5
DETAILS_CUT_FACTOR = 3

OUTPUT_FORMATS = ['text', 'json', 'csv']
