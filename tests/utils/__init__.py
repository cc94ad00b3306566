"""
Test utilities package for i18n-harvest tests.

### test_helpers.py
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `write_files()`: Write a source tree below a project root
- `write_locale()`: Write a locale JSON store
- `snapshot_directory()`: Capture file bytes for idempotence checks
- `create_test_config()`: Build a validated configuration from section overrides
"""
