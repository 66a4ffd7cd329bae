import os

from hypothesis import HealthCheck, settings

# Parser property tests build deeply nested inputs; keep CI runs bounded.
settings.register_profile(
    "ci", max_examples=50, deadline=None, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=200, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
