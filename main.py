"""
Starfield Hero Background
=========================

Pulsing stars, drifting dust, constellation lines that light up under the
pointer and the occasional rocket crossing the sky.

Controls:
    - Mouse / touch: Light up nearby stars and constellations
    - 1/2/3: Switch preset (hero, classic, nebula)
    - H: Toggle HUD
    - ESC: Quit
"""

from core.application import Application


def main():
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
