from prometheus_client import Counter, Histogram

# Histogram for Share call latency (seconds)
# endpoint: account_id, session_id, glucose_readings
dexcom_share_call_latency_seconds = Histogram(
    'dexcom_share_call_latency_seconds',
    'Latency of Dexcom Share calls in seconds',
    ['endpoint']
)

# Counter for total Share calls, labeled by endpoint and outcome
# status: success, transport_error, serialization_error, domain_error
dexcom_share_call_total = Counter(
    'dexcom_share_call_total',
    'Total Dexcom Share calls',
    ['endpoint', 'status']
)
