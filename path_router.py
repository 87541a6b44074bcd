"""Path routing: map proxy paths onto GitHub download URLs.

A request path looks like ``<access_prefix><routing_prefix><remainder>``.
The remainder is classified against a fixed, ordered table of URL shapes;
the first shape whose pattern matches produces the upstream URL.
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple, Union

from errors import AccessDenied, ProxyError, RouteUnmatched

logger = logging.getLogger(__name__)

# Owner, repo and ref names GitHub accepts
_GITHUB_PARAMETER_RE = re.compile(r"^[a-zA-Z0-9_.-]+$")


def is_valid_github_parameter(param: Optional[str]) -> bool:
    """Check an owner, repo or ref value against GitHub's name character set."""
    return bool(param) and _GITHUB_PARAMETER_RE.match(param) is not None


class Shape(str, enum.Enum):
    """Recognised URL shapes under the routing prefix."""

    RELEASE_DOWNLOAD = "release-download"
    SHORT_VERSION = "short-version"
    BLOB = "blob"
    RAW = "raw"


@dataclass(frozen=True)
class ShapeRule:
    """One row of the routing table.

    ``probe_first`` marks shapes whose upstream must be confirmed to exist
    before the response is relayed.
    """

    shape: Shape
    pattern: Pattern[str]
    url_template: str
    probe_first: bool = False


# Tried in order, first match wins. Groups: owner, repo, ref, file path.
ROUTES: Tuple[ShapeRule, ...] = (
    ShapeRule(
        Shape.RELEASE_DOWNLOAD,
        re.compile(r"([^/]+)/([^/]+)/releases/download/([^/]+)/(.*)"),
        "https://github.com/{owner}/{repo}/releases/download/{ref}/{file_path}",
        probe_first=True,
    ),
    ShapeRule(
        Shape.SHORT_VERSION,
        re.compile(r"([^/]+)/([^/]+)@([^/]+)/(.*)"),
        "https://github.com/{owner}/{repo}/raw/refs/tags/{ref}/{file_path}",
    ),
    ShapeRule(
        Shape.BLOB,
        re.compile(r"([^/]+)/([^/]+)/blob/([^/]+)/(.*)"),
        "https://raw.githubusercontent.com/{owner}/{repo}/{ref}/{file_path}",
    ),
    ShapeRule(
        Shape.RAW,
        re.compile(r"([^/]+)/([^/]+)/raw/([^/]+)/(.*)"),
        "https://raw.githubusercontent.com/{owner}/{repo}/{ref}/{file_path}",
    ),
)


@dataclass(frozen=True)
class RouteMatch:
    """Pieces of a matched path, valid for a single request."""

    rule: ShapeRule
    owner: str
    repo: str
    ref: str
    file_path: str

    @property
    def shape(self) -> Shape:
        return self.rule.shape

    @property
    def probe_first(self) -> bool:
        return self.rule.probe_first

    @property
    def upstream_url(self) -> str:
        return self.rule.url_template.format(
            owner=self.owner, repo=self.repo, ref=self.ref, file_path=self.file_path
        )


@dataclass(frozen=True)
class Forward:
    """Decision to fetch ``upstream_url`` and relay it."""

    upstream_url: str
    match: RouteMatch

    @property
    def probe_first(self) -> bool:
        return self.match.probe_first


@dataclass(frozen=True)
class Rejected:
    """Decision to refuse the request without contacting GitHub."""

    error: ProxyError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def reason(self) -> str:
        return type(self.error).__name__


RouteDecision = Union[Forward, Rejected]


class PathRouter:
    """Turns inbound paths into route decisions.

    Pure: holds only immutable configuration and performs no I/O.
    """

    def __init__(
        self,
        access_prefix: str,
        routing_prefix: str,
        enforce_name_validation: bool = False,
        routes: Tuple[ShapeRule, ...] = ROUTES,
    ):
        self.access_prefix = access_prefix
        self.routing_prefix = routing_prefix
        self.enforce_name_validation = enforce_name_validation
        self.routes = routes

    def route(self, path: str) -> RouteDecision:
        """Classify ``path`` and build the upstream URL for it."""
        if not path.startswith(self.access_prefix):
            logger.debug(f"[Router] Missing access prefix: {path}")
            return Rejected(AccessDenied())

        path = path[len(self.access_prefix):]

        if not path.startswith(self.routing_prefix):
            logger.debug(f"[Router] Missing routing prefix: {path}")
            return Rejected(AccessDenied())

        match = self.match(path[len(self.routing_prefix):])
        if match is None:
            logger.debug(f"[Router] No shape matched: {path}")
            return Rejected(RouteUnmatched())

        return Forward(upstream_url=match.upstream_url, match=match)

    def match(self, remainder: str) -> Optional[RouteMatch]:
        """Match the path below the routing prefix against the shape table."""
        for rule in self.routes:
            m = rule.pattern.fullmatch(remainder)
            if m is None:
                continue
            owner, repo, ref, file_path = m.groups()
            if self.enforce_name_validation and not all(
                is_valid_github_parameter(p) for p in (owner, repo, ref)
            ):
                logger.debug(f"[Router] Invalid GitHub name in {rule.shape.value} path: {remainder}")
                return None
            return RouteMatch(rule=rule, owner=owner, repo=repo, ref=ref, file_path=file_path)
        return None
