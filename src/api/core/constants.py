API_VERSION_HEADER = "X-Video-Credits-Version"

# Service-to-service authentication for the credit gate
INTERNAL_API_KEY_HEADER = "X-Internal-Key"

# Random video endpoint is public, limit per client IP
RANDOM_VIDEO_RATE_LIMIT = 30  # requests per minute
RANDOM_VIDEO_WINDOW_SECONDS = 60  # 1 minute

# Storage faults in the credit gate are retryable
CREDIT_GATE_RETRY_AFTER_SECONDS = 1

