import os
import sys

# Add the project directory to the sys.path (hosts that run this file directly)
project_home = os.environ.get('MISE_HOME', os.path.dirname(os.path.abspath(__file__)))
if project_home not in sys.path:
    sys.path.insert(0, project_home)

from app import create_app

application = create_app(os.environ.get('FLASK_ENV', 'production'))
