# src/bigfile_explorer/utils/config.py

class Config:
    # Upstream node configuration
    NODE_URL = "https://thebigfile.info:1984"
    NODE_TIMEOUT = 10  # seconds per request
    NODE_VERIFY_SSL = False
    NODE_MAX_CONCURRENCY = 8  # in-flight requests per fan-out

    # Server configuration
    HOST = "0.0.0.0"
    PORT = 3001

    # Dashboard configuration
    CACHE_TTL = 10  # seconds
    RECENT_BLOCK_COUNT = 15
    TREND_POINTS = 24
    TPS_WINDOW = 15
    MIN_TPS = 0.01

    # Fallbacks used when the node omits a size field
    ASSUMED_BLOCK_SIZE = 1024 * 1024  # 1MB
    ASSUMED_NETWORK_BLOCK_SIZE = 2 * 1024 * 1024  # 2MB
    STORAGE_COST = 0.1

    # End-of-day projection factors
    TRANSACTIONS_EOD_FACTOR = 24
    WEAVE_EOD_FACTOR = 1.01

    # Explorer configuration
    LATEST_BLOCKS_LIMIT = 10
    SERIES_WINDOW = 24  # blocks per time series
    MAX_TRANSACTIONS_PER_PAGE = 25

    # Network health fallbacks
    DEFAULT_BLOCK_TIME = 2.1
    UPTIME = 99.9
    HEALTHY_PEER_THRESHOLD = 5
    PEER_HEALTH_GOOD = 92
    PEER_HEALTH_DEGRADED = 75

    # Prometheus exposition
    METRICS_PREFIX = "arweave"

    # Logging
    LOG_DIR = "logs"
    LOG_LEVEL = "INFO"
