"""
Disease Risk Engine

Per-disease KNN + rule-based risk assessment and symptom-driven
multi-disease matching.
"""
__version__ = "0.1.0"
