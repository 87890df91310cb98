import os
import sys

# Service modules are imported top-level (config, models, api, ...)
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
