import os
import tempfile

# Keep settings and logs out of the real user data folder, and let Qt run without a display.
os.environ.setdefault("STOPWATCH_HOME", tempfile.mkdtemp(prefix="stopwatch_tests_"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
