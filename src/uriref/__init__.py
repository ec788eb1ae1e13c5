__version__ = "0.1"

from .parse import MAX_PORT, InvalidPortError, InvalidSchemeError, InvalidUserInfoError, ParsedUri, URIParseError, parse_authority, parse_authority_components, parse_fragment_and_query, parse_path, parse_scheme, parse_uri_reference
from .uri import Uri
