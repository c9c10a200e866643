"""Custom exceptions for the predictor core"""


class PredictorError(Exception):
    """Base exception for the college predictor"""
    pass


class LoadError(PredictorError):
    """Dataset could not be fetched or parsed"""
    pass


class ValidationError(PredictorError):
    """Prediction criteria failed validation"""
    pass
