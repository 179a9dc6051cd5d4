#setup: pip install -e ".[test]"
#setup: python -m fincalc    # or: flask --app fincalc.app:create_app run --port 5000 --debug

from fincalc.app import create_app
from fincalc.config import get_settings

if __name__ == "__main__":
    create_app().run(port=get_settings().port, debug=True)
