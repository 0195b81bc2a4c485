"""Run Streamlit app from project root. Use: python run_app.py"""
import os
import subprocess
import sys

root = os.path.dirname(os.path.abspath(__file__))
app_path = os.path.join(root, "ats_cv_optimizer", "app.py")
env = dict(os.environ)
# Make the package importable without an install
env["PYTHONPATH"] = os.pathsep.join(p for p in (root, env.get("PYTHONPATH", "")) if p)
subprocess.run([sys.executable, "-m", "streamlit", "run", app_path], cwd=root, env=env, check=True)
