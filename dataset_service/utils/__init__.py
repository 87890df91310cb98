from utils.logger import setup_logger
from utils.validators import Validators
from utils.parameter_schema import build_parameters_schema, parameters_to_text

# Export utils
__all__ = ["setup_logger", "Validators", "build_parameters_schema", "parameters_to_text"]
