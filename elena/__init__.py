"""
Elena Gateway - Home affordability service

A FastAPI-based microservice that turns a home-buying scenario into a
mortgage estimate, an affordability verdict and one recommended next step.
"""

__version__ = "0.1.0"
