from __future__ import annotations

from mobilenet_ssd_demo.demo import main


if __name__ == "__main__":
    main()
