"""Azure Functions V2 entry point — registers the index refresh blueprint from src/."""

import os
import sys

# Add src/ to Python path so that Azure Functions runtime can resolve
# the drive_pages package from the src/ layout.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import azure.functions as func

from drive_pages.functions.timer_trigger import bp as timer_bp

app = func.FunctionApp()
app.register_blueprint(timer_bp)
