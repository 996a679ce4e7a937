"""Entry point for Streamlit deployment - redirects to app/app.py

Also puts src/ on sys.path so `streamlit run app.py` works from a checkout
without `pip install -e .`.
"""
import runpy
import sys
import os

root = os.path.dirname(os.path.abspath(__file__))
for path in (os.path.join(root, "src"), root):
    if path not in sys.path:
        sys.path.insert(0, path)

runpy.run_path(os.path.join(root, "app", "app.py"), run_name="__main__")
