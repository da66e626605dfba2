from .binder import build_queries
from .binder import load_queries_into
from .binder import query_field
from .exceptions import BaseError
from .exceptions import DuplicateQueryError
from .exceptions import FieldNotAssignableError
from .exceptions import InvalidQueryNameError
from .exceptions import LoadError
from .exceptions import MustLoadError
from .exceptions import NotAStructError
from .exceptions import QueryNotFoundError
from .loader import load_from_dir
from .loader import load_from_file
from .loader import load_from_package
from .loader import load_from_string
from .loader import must_load_from_dir
from .loader import must_load_from_file
from .loader import must_load_from_package
from .loader import must_load_from_string
from .segmenter import extract_query_map
