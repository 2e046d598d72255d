"""k1s0 modrinth_client library."""

from .base62 import Base62Id, Base62Int, decode, encode
from .client import ModrinthClient
from .config import ConfigError, ConfigErrorCodes, LogSection, ModrinthConfig, load_config
from .endpoints import DEFAULT_API_BASE, ProjectIdentifier
from .exceptions import (
    Base62DecodeError,
    DeserializeError,
    InputError,
    ModrinthError,
    ModrinthErrorCodes,
    StatusNotOkError,
    TransportError,
)
from .executor import ApiResponse, DecodingExecutor
from .http_client import HttpModrinthClient
from .logger import configure_logging, new_logger
from .models import (
    DependencyType,
    DonationLink,
    FileHashes,
    GalleryItem,
    LoaderSupport,
    ModeratorMessage,
    Page,
    Project,
    ProjectLicense,
    ProjectSearchResult,
    ProjectStatus,
    ProjectType,
    ProjectVersion,
    SideSupport,
    VersionDependency,
    VersionFile,
    VersionType,
)
from .pagination import PaginatorState, SearchPaginator, SearchStream
from .query import SearchFacet, SearchIndex, SearchParams, to_query_string

__all__ = [
    "ApiResponse",
    "Base62DecodeError",
    "Base62Id",
    "Base62Int",
    "ConfigError",
    "ConfigErrorCodes",
    "DEFAULT_API_BASE",
    "DecodingExecutor",
    "DependencyType",
    "DeserializeError",
    "DonationLink",
    "FileHashes",
    "GalleryItem",
    "HttpModrinthClient",
    "InputError",
    "LoaderSupport",
    "LogSection",
    "ModeratorMessage",
    "ModrinthClient",
    "ModrinthConfig",
    "ModrinthError",
    "ModrinthErrorCodes",
    "Page",
    "PaginatorState",
    "Project",
    "ProjectIdentifier",
    "ProjectLicense",
    "ProjectSearchResult",
    "ProjectStatus",
    "ProjectType",
    "ProjectVersion",
    "SearchFacet",
    "SearchIndex",
    "SearchPaginator",
    "SearchParams",
    "SearchStream",
    "SideSupport",
    "StatusNotOkError",
    "TransportError",
    "VersionDependency",
    "VersionFile",
    "VersionType",
    "configure_logging",
    "decode",
    "encode",
    "load_config",
    "new_logger",
    "to_query_string",
]
