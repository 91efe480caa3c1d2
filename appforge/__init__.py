"""appforge: scaffold a Rails forum app through an ordered task pipeline."""

__version__ = "0.4.0"
__tagline__ = "Rails + Thredded app scaffolder"
