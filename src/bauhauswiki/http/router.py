"""
=============================================================================
URL ROUTER
=============================================================================

Maps request method + path to a handler function.

=============================================================================
ROUTE PATTERNS
=============================================================================

    Pattern            Matches                    Params
    ───────            ───────                    ──────
    /styles.css        /styles.css only           {}
    /wiki/:key         /wiki/bauhaus              {"key": "bauhaus"}
                       (one segment, no "/")
    /wiki/*key         /wiki/bauhaus              {"key": "bauhaus"}
                       /wiki/a/b                  {"key": "a/b"}
                       /wiki/                     {"key": ""}
    /search*rest       /search                    {"rest": ""}
                       /search/anything           {"rest": "/anything"}

A "*name" wildcard captures everything remaining, including slashes and
nothing at all. Placed after static text in the same segment it turns the
route into a plain prefix match ("/search*rest").

Paths are matched exactly as sent: no percent-decoding, no trailing-slash
normalization. Article keys reach the handlers untouched.

=============================================================================
OVERLAPPING ROUTES
=============================================================================

Routes are tried from most to least specific, regardless of registration
order:

    1. Fully static routes           "/", "/styles.css"
    2. Dynamic routes, longest static prefix first
                                     "/history/*key" before "/wiki/*key"

So "/" never swallows "/wiki/bauhaus", and a route registered later with a
longer prefix still wins over a shorter one.

    Pattern:  /history/*key
    Regex:    ^/history/(?P<key>.*)$
                        ───────────
                        Named capture group, DOTALL

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Dict, List
import re

from .request import HTTPRequest
from .response import HTTPResponse, not_found, method_not_allowed


# Handler: A function that takes a request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]


@dataclass
class Route:
    """
    Represents a registered route.

    =========================================================================
    ANATOMY OF A ROUTE
    =========================================================================

        @router.get("/history/*key", name="history")
        def history(request):
            ...

        Route(
            path="/history/*key",    # URL pattern
            method="GET",            # HTTP method filter
            handler=history,         # Handler function
            name="history",          # Optional name (logs, route listing)
            _pattern=<compiled>,     # Compiled regex for matching
            _param_names=["key"],    # Dynamic parameter names
            _static_prefix="/history/",
        )

    =========================================================================
    """

    path: str                        # URL pattern (e.g., /wiki/*key)
    method: Optional[str]            # HTTP method (None = any method)
    handler: Handler                 # Handler function to call
    name: Optional[str] = None       # Route name

    # Internal: compiled regex pattern for matching
    _pattern: Optional[re.Pattern] = field(default=None, repr=False)
    # Internal: ordered list of parameter names in pattern
    _param_names: List[str] = field(default_factory=list, repr=False)
    # Internal: literal text before the first parameter
    _static_prefix: str = field(default="", repr=False)

    @property
    def is_static(self) -> bool:
        """True when the pattern has no parameters."""
        return not self._param_names

    @property
    def specificity(self) -> tuple[int, int]:
        """Sort key: static routes first, then longer static prefixes."""
        return (0 if self.is_static else 1, -len(self._static_prefix))


@dataclass
class RouteMatch:
    """
    Result of a successful route match.

    Example:
        Pattern: /wiki/*key
        Path:    /wiki/bauhaus
        Result:  RouteMatch(route=<Route>, params={"key": "bauhaus"})
    """
    route: Route                     # The Route that matched
    params: Dict[str, str]           # Extracted path parameters


class Router:
    """
    HTTP request router.

    ==========================================================================
    DECORATOR-BASED API
    ==========================================================================

        router = Router()

        @router.get("/wiki/*key")
        def view(request):
            key = request.path_params["key"]
            ...

        @router.post("/save/*key")
        def save(request):
            ...

    ==========================================================================
    DISPATCH OUTCOMES
    ==========================================================================

        Route matches path and method      → handler(request)
        Route matches path, other method   → 405 + Allow header
        Nothing matches path               → 404

    ==========================================================================
    """

    def __init__(self):
        """Initialize an empty router."""
        self._routes: List[Route] = []     # Sorted by specificity

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        path: str,
        handler: Handler,
        method: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Route:
        """
        Register a route.

        The decorator methods (get, post) are convenience wrappers around
        this.

        Args:
            path: URL pattern (e.g., /wiki/*key)
            handler: Handler function that takes request, returns response
            method: HTTP method (None for any method)
            name: Optional route name

        Returns:
            The registered Route object
        """
        pattern, param_names, static_prefix = self._compile_pattern(path)

        route = Route(
            path=path,
            method=method.upper() if method else None,
            handler=handler,
            name=name,
            _pattern=pattern,
            _param_names=param_names,
            _static_prefix=static_prefix,
        )

        self._routes.append(route)
        # Stable sort keeps registration order among equally specific routes
        self._routes.sort(key=lambda r: r.specificity)

        return route

    def _compile_pattern(self, path: str) -> tuple[re.Pattern, List[str], str]:
        """
        Compile a path pattern into a regex.

        =====================================================================
        PATTERN COMPILATION
        =====================================================================

        Input:  "/search*rest"

        Step 1: Split by "/"
                ["", "search*rest"]

        Step 2: Process each segment
                ""              → (skip empty)
                "search*rest"   → /search(?P<rest>.*)   (prefix + wildcard)

        Step 3: Join and add anchors
                ^/search(?P<rest>.*)$

        =====================================================================

        Patterns:
            :param - Match a single path segment (no slashes)
            *param - Match remaining path (including slashes, may be empty)

        Args:
            path: Route pattern to compile

        Returns:
            Tuple of (compiled regex, parameter names, static prefix)
        """
        param_names: List[str] = []
        regex_parts = ["^"]
        static_parts: List[str] = []
        dynamic = False

        if path == "/":
            return re.compile(r"^/$"), param_names, "/"

        segments = path.split("/")
        for segment in segments:
            if not segment:
                continue

            regex_parts.append("/")
            if not dynamic:
                static_parts.append("/")

            if segment.startswith(":"):
                # :key → (?P<key>[^/]+)
                param_name = segment[1:]
                param_names.append(param_name)
                regex_parts.append(f"(?P<{param_name}>[^/]+)")
                dynamic = True

            elif "*" in segment:
                # "*key" or "prefix*key" → prefix(?P<key>.*)
                literal, _, param_name = segment.partition("*")
                param_name = param_name or "wildcard"
                param_names.append(param_name)
                regex_parts.append(re.escape(literal))
                regex_parts.append(f"(?P<{param_name}>.*)")
                if not dynamic:
                    static_parts.append(literal)
                break  # Wildcard consumes everything, stop here

            else:
                regex_parts.append(re.escape(segment))
                if not dynamic:
                    static_parts.append(segment)

        # A pattern ending in "/" keeps its trailing slash
        if path.endswith("/") and not param_names:
            regex_parts.append("/")
            static_parts.append("/")

        regex_parts.append("$")
        pattern = re.compile("".join(regex_parts), re.DOTALL)

        return pattern, param_names, "".join(static_parts)

    # =========================================================================
    # ROUTE MATCHING
    # =========================================================================

    def match(self, method: str, path: str) -> Optional[RouteMatch]:
        """
        Find the most specific route for the given method and path.

        Args:
            method: HTTP method (GET, POST)
            path: Request path, exactly as sent (/wiki/bauhaus)

        Returns:
            RouteMatch if found, None otherwise
        """
        for route in self._routes:
            # Check method (None means any method is allowed)
            if route.method and route.method != method.upper():
                continue

            if route._pattern:
                match = route._pattern.match(path)
                if match:
                    return RouteMatch(route=route, params=match.groupdict())

        return None

    def get_allowed_methods(self, path: str) -> List[str]:
        """
        Get list of allowed methods for a path.

        Used to generate the Allow header for 405 Method Not Allowed responses.
        """
        methods = set()

        for route in self._routes:
            if route._pattern and route._pattern.match(path):
                if route.method:
                    methods.add(route.method)
                else:
                    return ["GET", "POST"]

        return sorted(methods)

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request to the appropriate handler.

        1. Find matching route
        2. Inject path parameters into the request
        3. Call handler
        4. Return response (or 404 / 405 if no route fits)
        """
        match = self.match(request.method, request.path)

        if match:
            request.path_params = match.params
            return match.route.handler(request)

        # No route found - check if path exists with different method
        allowed = self.get_allowed_methods(request.path)
        if allowed:
            return method_not_allowed(allowed)

        return not_found()

    # =========================================================================
    # DECORATOR-STYLE ROUTE REGISTRATION
    # =========================================================================

    def route(
        self,
        path: str,
        method: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Callable[[Handler], Handler]:
        """
        Decorator for registering routes.

        Usage:
            @router.route("/wiki/*key", method="GET")
            def view(request):
                ...
        """
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, method, name)
            return handler  # Return handler unchanged (allows stacking decorators)
        return decorator

    def get(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a GET route."""
        return self.route(path, "GET", name)

    def post(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a POST route."""
        return self.route(path, "POST", name)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Route]:
        """Get all registered routes, most specific first."""
        return list(self._routes)

    def print_routes(self) -> None:
        """
        Print all registered routes (useful for debugging).

        Example output:
            Registered Routes:
            ------------------------------------------------------------
              GET      /
              GET      /styles.css
              GET      /history/*key
              ...
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for route in self.routes():
            method = route.method or "ANY"
            print(f"  {method:8} {route.path}")
        print("-" * 60)
