"""Development server for the color ramp engine.

Usage
-----
$ pip install -e .
$ python main.py                  # starts on http://127.0.0.1:5000

    curl -X POST localhost:5000/ramp -H 'content-type: application/json' \
         -d '{"baseColor": "#3b82f6", "totalSteps": 10}'
"""

from color_ramp.app import create_app

if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
