"""
Test Fixtures - Shared Test Data.

    - sample_config.yaml: Complete reporter configuration
    - config/profiles/: Profiles merged over the sample configuration
"""
