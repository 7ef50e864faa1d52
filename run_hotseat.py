import sys
import os

from dotenv import load_dotenv

# Ensure src layout is on path when running directly from repo root.
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, "src")
load_dotenv(os.path.join(ROOT, ".env"))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from walled_city.render.pygame_renderer import main

if __name__ == "__main__":
    main()
