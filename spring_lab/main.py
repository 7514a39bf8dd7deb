import logging
import sys

from PySide6.QtCore import QCoreApplication, QTimer

from spring_lab.app.frame_driver import FrameDriver
from spring_lab.core.vector import Vector2D
from spring_lab.model.spring_lab_model import SpringLabModel

logger = logging.getLogger(__name__)

RUN_SECONDS = 5


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    app = QCoreApplication(sys.argv)

    model = SpringLabModel()
    # Hang the 250 g mass on the first spring and let it go
    mass = model.masses[0]
    spring = model.springs[0]
    model.propose_drag_position(mass, Vector2D(spring.position.x, spring.bottom))
    model.release_mass(mass)

    driver = FrameDriver(model)
    driver.stepped.connect(
        lambda time: logger.debug(f"t={time:.3f}s y={mass.position.y:.4f} thermal={mass.thermal_energy:.5f}")
    )
    driver.start()

    def finish():
        driver.stop()
        logger.info(f"After {model.time:.2f}s: KE={mass.kinetic_energy:.4f} J, "
                    f"PE={mass.elastic_potential_energy:.4f} J, thermal={mass.thermal_energy:.4f} J")
        app.quit()

    QTimer.singleShot(RUN_SECONDS * 1000, finish)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
