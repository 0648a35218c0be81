# exporters/html_exporter.py
import html
import json
import logging
from string import Template
from xml.etree.ElementTree import tostring

from core.interaction import InteractionState
from core.region_map import RegionMap
# Reuses the SVG building logic
from exporters.svg_exporter import SVGExporter

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Mapa interactivo de regiones"

# The page script mirrors core.interaction.InteractionState: enter sets the
# hovered region, leave clears it only for the same region, click selects.
HTML_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="es">
<head>
<meta charset="utf-8">
<title>${title}</title>
<style>
  .region-map-container { position: relative; font-family: sans-serif; }
  .region-map-svg { width: 100%; height: auto; }
  .province { fill: #dfe7ee; stroke: #51606e; stroke-width: 0.5; cursor: pointer; }
  .province.hovered { fill: #a9c8e0; }
  .province.selected { fill: #3d7fb3; }
  .tooltip { position: absolute; top: 3em; left: 1em; padding: 4px 8px; background: rgba(255, 255, 255, 0.9); border: 1px solid #999; }
  .info-panel { margin: 1em 0; padding: 0.5em 1em; border: 1px solid #ccc; }
</style>
</head>
<body>
<div class="region-map-container">
  <h2>${title}</h2>
  <div class="tooltip" hidden></div>
  <div class="info-panel" hidden>
    <h3>Región seleccionada</h3>
    <p></p>
    <button type="button">Limpiar selección</button>
  </div>
  <div class="map-wrapper">
${svg}
  </div>
</div>
<script>
(function () {
  var hovered = null;
  var selected = ${selected};
  var tooltip = document.querySelector('.tooltip');
  var panel = document.querySelector('.info-panel');
  var paths = document.querySelectorAll('path.province');

  function refresh() {
    paths.forEach(function (p) {
      var id = p.getAttribute('data-name');
      p.classList.toggle('hovered', id === hovered);
      p.classList.toggle('selected', id === selected);
    });
    tooltip.hidden = hovered === null;
    tooltip.textContent = hovered || '';
    panel.hidden = selected === null;
    panel.querySelector('p').textContent = selected || '';
  }

  paths.forEach(function (p) {
    var id = p.getAttribute('data-name');
    p.addEventListener('mouseenter', function () { hovered = id; refresh(); });
    p.addEventListener('mouseleave', function () { if (hovered === id) { hovered = null; } refresh(); });
    p.addEventListener('click', function () { selected = id; refresh(); });
  });
  panel.querySelector('button').addEventListener('click', function () { selected = null; refresh(); });
  refresh();
})();
</script>
</body>
</html>
""")


class HTMLExporter:
    @staticmethod
    def _generate_html_string(region_map: RegionMap, title: str = DEFAULT_TITLE,
                              state: InteractionState | None = None) -> str:
        """
        Generates a standalone HTML page embedding the SVG built by
        SVGExporter plus the hover/select script.
        """
        state = state or InteractionState()
        svg_root = SVGExporter._build_svg_root_element(region_map, state)
        svg_str = tostring(svg_root, encoding="unicode", method="xml")
        # "</" would close the <script> block early
        selected = json.dumps(state.selected).replace("</", "<\\/")
        return HTML_TEMPLATE.substitute(title=html.escape(title), svg=svg_str, selected=selected)

    @staticmethod
    def export(region_map: RegionMap, filename: str, title: str = DEFAULT_TITLE,
               state: InteractionState | None = None):
        if not region_map.regions:
            raise ValueError("No hay regiones para exportar.")
        if not filename.lower().endswith((".html", ".htm")):
            raise ValueError("El nombre de archivo debe terminar en .html")

        try:
            html_content = HTMLExporter._generate_html_string(region_map, title, state)
            with open(filename, "w", encoding="utf-8") as f:
                f.write(html_content)
        except OSError as e:
            raise RuntimeError(f"Error al crear el archivo HTML '{filename}': {e}") from e

        logger.info(f"{len(region_map.regions)} regiones exportadas a {filename}")
