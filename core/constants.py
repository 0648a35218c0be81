# core/constants.py

# Lienzo por defecto
DEFAULT_CANVAS_WIDTH = 1200
DEFAULT_PADDING = 20
DEFAULT_SKIP_UNSUPPORTED = False

# Decimales de las coordenadas en los paths
PATH_PRECISION = 2

# Nombre de respaldo para features sin propiedad "name" (índice base 1)
REGION_LABEL_TEMPLATE = "Region {number}"

# Secciones del archivo de configuración
CANVAS_SECTION_NAME = 'Canvas'
DATA_SECTION_NAME = 'Data'

# Clases de estilo que usan las superficies de dibujo
REGION_CLASS = 'province'
HOVERED_CLASS = 'hovered'
SELECTED_CLASS = 'selected'
