import logging
import os
import sys
from PySide6.QtCore import Qt, QPointF
from PySide6.QtGui import (
    QAction,
    QBrush,
    QColor,
    QPainterPath,
    QPen,
    QResizeEvent
)
from PySide6.QtWidgets import (
    QApplication,
    QMainWindow,
    QWidget,
    QToolBar,
    QStyle,
    QMessageBox,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QFileDialog,
    QGraphicsPathItem,
    QGraphicsView,
    QGraphicsScene,
    QListWidget
)

from config_dialog import ConfigDialog
from core.config import MapSettings
from core.coordinate_manager import CoordinateManager
from core.geometry import RegionPath
from core.interaction import InteractionState
from core.region_map import RegionMap, build_region_map
from exporters.html_exporter import HTMLExporter
from exporters.svg_exporter import SVGExporter

logger = logging.getLogger(__name__)

FILL_COLOR = QColor("#dfe7ee")
HOVER_COLOR = QColor("#a9c8e0")
SELECTED_COLOR = QColor("#3d7fb3")
STROKE_COLOR = QColor("#51606e")


def painter_path_from_rings(rings) -> QPainterPath:
    """Un subpath cerrado por anillo; OddEvenFill deja los huecos vacíos."""
    path = QPainterPath()
    path.setFillRule(Qt.OddEvenFill)
    for ring in rings:
        if not ring:
            continue
        path.moveTo(QPointF(ring[0][0], ring[0][1]))
        for x, y in ring[1:]:
            path.lineTo(QPointF(x, y))
        path.closeSubpath()
    return path


class RegionItem(QGraphicsPathItem):
    def __init__(self, region: RegionPath, window: "MainWindow"):
        super().__init__(painter_path_from_rings(region.rings))
        self.region_id = region.region_id
        self._window = window
        self.setAcceptHoverEvents(True)
        self.setCursor(Qt.PointingHandCursor)
        pen = QPen(STROKE_COLOR, 0.5)
        pen.setCosmetic(True)
        self.setPen(pen)
        self.apply_state(InteractionState())

    def apply_state(self, state: InteractionState):
        if state.is_selected(self.region_id):
            color = SELECTED_COLOR
        elif state.is_hovered(self.region_id):
            color = HOVER_COLOR
        else:
            color = FILL_COLOR
        self.setBrush(QBrush(color))
        # La región seleccionada o bajo el puntero se dibuja encima
        self.setZValue(1 if state.is_selected(self.region_id) or state.is_hovered(self.region_id) else 0)

    def hoverEnterEvent(self, event):
        self._window.on_region_enter(self.region_id)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self._window.on_region_leave(self.region_id)
        super().hoverLeaveEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._window.on_region_click(self.region_id)
            event.accept()
            return
        super().mousePressEvent(event)


class MapView(QGraphicsView):
    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        if self.scene() and not self.scene().sceneRect().isEmpty():
            self.fitInView(self.scene().sceneRect(), Qt.KeepAspectRatio)


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Mapa de Regiones")
        self.settings = MapSettings()
        self.state = InteractionState()
        self.mgr: CoordinateManager | None = None
        self.region_map: RegionMap | None = None
        self.current_path: str | None = None
        self.items: dict[str, list[RegionItem]] = {}
        self._build_ui()
        self._create_toolbar()

    # --- Métodos para overlays en Canvas ---
    def _show_canvas_error(self, message: str):
        self.canvas_error_label.setText(message)
        self.canvas_error_label.adjustSize()
        self.canvas_error_label.show()
        self._position_canvas_widgets()
        self.canvas_error_label.raise_()

    def _clear_canvas_error(self):
        self.canvas_error_label.hide()
        self.canvas_error_label.setText("")

    def _position_canvas_widgets(self):
        if self.canvas_error_label.isVisible():
            self.canvas_error_label.move(
                self.canvas.width() // 2 - self.canvas_error_label.width() // 2,
                self.canvas.height() - self.canvas_error_label.height() - 10
            )
            self.canvas_error_label.raise_() # Asegurar que esté encima

        if self.tooltip_label.isVisible():
            self.tooltip_label.move(10, 10)
            self.tooltip_label.raise_()

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        self._position_canvas_widgets()

    # --- Métodos de UI ---
    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)

        control_panel_widget = QWidget()
        control = QVBoxLayout(control_panel_widget)

        control.addWidget(QLabel("Regiones:"))
        self.region_list = QListWidget()
        self.region_list.itemClicked.connect(lambda item: self.on_region_click(item.text()))
        control.addWidget(self.region_list)

        # Panel de la región seleccionada
        self.info_panel = QWidget()
        info = QVBoxLayout(self.info_panel)
        info.addWidget(QLabel("<b>Región seleccionada</b>"))
        self.selected_label = QLabel("")
        info.addWidget(self.selected_label)
        btn = QPushButton("Limpiar selección"); btn.clicked.connect(self._on_clear_selection)
        info.addWidget(btn)
        self.info_panel.hide()
        control.addWidget(self.info_panel)

        self.canvas = MapView()
        self.scene = QGraphicsScene(self.canvas); self.canvas.setScene(self.scene)
        self.canvas.setMinimumSize(600, 400); self.canvas.setStyleSheet("background-color:white; border:1px solid #ccc; padding:0px;")
        self.canvas.setMouseTracking(True)

        self.canvas_error_label = QLabel(self.canvas)
        self.canvas_error_label.setStyleSheet("color: red; background-color: rgba(255, 255, 255, 210); padding: 5px; border: 1px solid red; border-radius: 3px;")
        self.canvas_error_label.hide()

        self.tooltip_label = QLabel(self.canvas)
        self.tooltip_label.setStyleSheet("background-color: rgba(255, 255, 255, 230); padding: 4px; border: 1px solid #999;")
        self.tooltip_label.hide()

        main_layout.addWidget(control_panel_widget, 1)
        main_layout.addWidget(self.canvas, 3)

    def _create_toolbar(self):
        tb = QToolBar("Principal"); self.addToolBar(tb)
        actions_data = [
            (QStyle.SP_DialogOpenButton, "Abrir GeoJSON", self._on_open),
            (QStyle.SP_DialogSaveButton, "Exportar SVG", self._on_export_svg),
            (QStyle.SP_FileDialogListView, "Exportar HTML", self._on_export_html),
            None,
            (QStyle.SP_DialogResetButton, "Limpiar selección", self._on_clear_selection),
            None,
            (QStyle.SP_FileDialogDetailedView, "Configuraciones", self._on_settings),
        ]
        for item_data in actions_data:
            if item_data is None: tb.addSeparator(); continue
            action = QAction(self.style().standardIcon(item_data[0]), item_data[1], self)
            action.triggered.connect(item_data[2])
            tb.addAction(action)

    # --- Estado de interacción ---
    def on_region_enter(self, region_id: str):
        if self.state.enter(region_id): self._refresh_state()

    def on_region_leave(self, region_id: str):
        if self.state.leave(region_id): self._refresh_state()

    def on_region_click(self, region_id: str):
        if self.state.click(region_id): self._refresh_state()

    def _on_clear_selection(self):
        if self.state.clear_selection(): self._refresh_state()

    def _refresh_state(self):
        for region_items in self.items.values():
            for item in region_items:
                item.apply_state(self.state)

        if self.state.hovered is not None:
            self.tooltip_label.setText(self.state.hovered)
            self.tooltip_label.adjustSize()
            self.tooltip_label.show()
            self._position_canvas_widgets()
        else:
            self.tooltip_label.hide()

        self.info_panel.setVisible(self.state.selected is not None)
        self.selected_label.setText(self.state.selected or "")

    # --- Dibujo ---
    def _redraw_scene(self):
        self.scene.clear(); self.items.clear(); self.region_list.clear()
        self.state.clear(); self._refresh_state()
        if not self.mgr: return
        self.region_map = build_region_map(self.mgr, self.settings)
        self.scene.setSceneRect(0, 0, self.region_map.width, self.region_map.height)
        for region in self.region_map.regions:
            item = RegionItem(region, self)
            self.scene.addItem(item)
            # Ids repetidos comparten resaltado, como en el estado de interacción
            self.items.setdefault(region.region_id, []).append(item)
            self.region_list.addItem(region.region_id)
        self.canvas.fitInView(self.scene.sceneRect(), Qt.KeepAspectRatio)

    def _load_file(self, path: str):
        self._clear_canvas_error()
        try:
            self.mgr = CoordinateManager.from_file(path, self.settings.skip_unsupported)
            self._redraw_scene()
        except FileNotFoundError: QMessageBox.critical(self, "Error de Carga", f"Archivo no encontrado: {path}")
        except OSError as e:
            QMessageBox.critical(self, "Error de Carga", f"No se puede leer {path}: {e}")
            logger.error(f"Error al leer {path}: {e}")
        except ValueError as e:
            # MapDataError y JSON inválido
            self.mgr = None; self.region_map = None; self._redraw_scene()
            self._show_canvas_error(f"No se puede dibujar el mapa: {e}")
            logger.error(f"Error al cargar {path}: {e}")
        else:
            self.current_path = path
            self.setWindowTitle(f"Mapa de Regiones - {os.path.basename(path)}")

    # --- Slots ---
    def _on_open(self):
        filters = "Archivos GeoJSON (*.json *.geojson);;Todos los archivos (*)"
        path, _ = QFileDialog.getOpenFileName(self, "Abrir GeoJSON", "", filters)
        if path: self._load_file(path)

    def _export(self, title: str, filters: str, exporter):
        if not self.region_map or not self.region_map.regions:
            QMessageBox.warning(self, "Nada para Exportar", "No hay regiones cargadas para exportar."); return
        path, _ = QFileDialog.getSaveFileName(self, title, "", filters)
        if not path: return
        try:
            exporter(self.region_map, path)
            QMessageBox.information(self, "Éxito", f"Archivo guardado en:\n{path}")
        except (ValueError, RuntimeError) as e: QMessageBox.critical(self, "Error de Exportación", str(e))

    def _on_export_svg(self):
        self._export("Exportar SVG", "Archivos SVG (*.svg)",
                     lambda region_map, path: SVGExporter.export(region_map, path, self.state))

    def _on_export_html(self):
        self._export("Exportar HTML", "Archivos HTML (*.html)",
                     lambda region_map, path: HTMLExporter.export(region_map, path, state=self.state))

    def _on_settings(self):
        dialog = ConfigDialog(self.settings, self)
        if not dialog.exec(): return
        try: self.settings = dialog.get_settings()
        except ValueError as e: QMessageBox.critical(self, "Configuración Inválida", str(e)); return
        # skip_unsupported afecta la decodificación: se vuelve a leer el archivo
        if self.current_path: self._load_file(self.current_path)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s|%(name)s|%(message)s")
    app = QApplication(sys.argv)
    win = MainWindow()
    if len(sys.argv) > 1: win._load_file(sys.argv[1])
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
