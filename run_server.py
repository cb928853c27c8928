import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from nkp_search.api.server import app  # noqa: E402

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5002"))
    if os.environ.get("APP_ENV") == "production":
        from waitress import serve
        print(f"Starting production server with Waitress on port {port}...")
        serve(app, host="0.0.0.0", port=port)
    else:
        print("Starting development server...")
        app.run(debug=True, port=port, host="0.0.0.0")
