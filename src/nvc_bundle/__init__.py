"""Canadian National Vaccine Catalogue bundle fetcher."""

__version__ = "0.1.0"
