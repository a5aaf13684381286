"""
Unit Tests - Testing Individual Components in Isolation.

Test Files:
    - test_tags.py: Tag copy and merge
    - test_translator.py: Per-kind metric translation
    - test_batch_sender.py: Batch writes and failures
    - test_connection_supervisor.py: Ping and reconnect
    - test_reporter.py: Trigger handlers and scheduling
    - test_influxdb_client.py: Endpoint parsing and InfluxDB adapter
    - test_memory_registry.py: In-memory registry and metrics
    - test_config_loader.py: Configuration loading/validation
"""
