from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)

EXTERNAL_API_COUNT = Counter(
    "external_api_requests_total",
    "Total number of external API requests",
    ["source", "status"],
)

EXTERNAL_API_DURATION = Histogram(
    "external_api_duration_seconds",
    "Duration of external API requests in seconds",
    ["source"],
)

CACHE_HITS = Counter("cache_hits_total", "Total number of cache hits")
CACHE_MISSES = Counter("cache_misses_total", "Total number of cache misses")

SEARCH_COALESCED = Counter(
    "search_coalesced_total",
    "Searches that joined an already running provider request",
)

SEARCH_FALLBACK = Counter(
    "search_fallback_total",
    "Provider calls answered with fallback data",
    ["reason"],
)

COOLDOWN_WAIT = Histogram(
    "provider_cooldown_wait_seconds",
    "Time spent waiting at the global provider cooldown gate",
)
