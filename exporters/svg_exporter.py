# exporters/svg_exporter.py
import logging
from xml.etree.ElementTree import Element, SubElement, tostring
from xml.dom import minidom

from core.interaction import InteractionState
from core.region_map import RegionMap

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class SVGExporter:
    @staticmethod
    def _build_svg_root_element(region_map: RegionMap, state: InteractionState | None = None) -> Element:
        """
        Builds the SVG root Element: one <path> per region, in collection order,
        with the region id as data-name and as a <title> tooltip.
        Style classes reflect the given interaction state, if any.
        """
        state = state or InteractionState()

        svg_root = Element(
            "svg",
            xmlns=SVG_NAMESPACE,
            viewBox=region_map.view_box,
            preserveAspectRatio="xMidYMid meet",
        )
        svg_root.set("class", "region-map-svg")
        group = SubElement(svg_root, "g")

        for region in region_map.regions:
            path = SubElement(group, "path", {
                "d": region.path_data,
                "class": " ".join(state.style_classes(region.region_id)),
                "data-name": region.region_id,
            })
            SubElement(path, "title").text = region.region_id

        return svg_root

    @staticmethod
    def _generate_svg_string(region_map: RegionMap, state: InteractionState | None = None) -> str:
        svg_root = SVGExporter._build_svg_root_element(region_map, state)
        xml_bytes = tostring(svg_root, encoding="utf-8", method="xml")
        parsed_xml = minidom.parseString(xml_bytes)
        return parsed_xml.toprettyxml(indent="  ")

    @staticmethod
    def export(region_map: RegionMap, filename: str, state: InteractionState | None = None):
        if not region_map.regions:
            raise ValueError("No hay regiones para exportar.")
        if not filename.lower().endswith(".svg"):
            raise ValueError("El nombre de archivo debe terminar en .svg")

        try:
            svg_str_pretty = SVGExporter._generate_svg_string(region_map, state)
            with open(filename, "w", encoding="utf-8") as f:
                f.write(svg_str_pretty)
        except OSError as e:
            raise RuntimeError(f"Error al crear el archivo SVG '{filename}': {e}") from e

        logger.info(f"{len(region_map.regions)} regiones exportadas a {filename}")
