# core/config.py
import configparser
import dataclasses
import os.path

from core import constants


@dataclasses.dataclass
class MapSettings:
    canvas_width: float = constants.DEFAULT_CANVAS_WIDTH
    padding: float = constants.DEFAULT_PADDING
    skip_unsupported: bool = constants.DEFAULT_SKIP_UNSUPPORTED

    def show(self):
        print()
        print('Usando configuración:')
        for k, v in dataclasses.asdict(self).items():
            print(f'  + {k}: {v}')

    def validate(self):
        """
        Lanza ValueError si el lienzo no deja área dibujable.
        """
        if self.canvas_width <= 0:
            raise ValueError(f"Ancho de lienzo '{self.canvas_width}' inválido. Debe ser mayor que 0.")
        if self.padding < 0:
            raise ValueError(f"Margen '{self.padding}' inválido. No puede ser negativo.")
        if self.canvas_width - 2 * self.padding <= 0:
            raise ValueError(
                f"El margen {self.padding} no deja área dibujable en un lienzo de ancho {self.canvas_width}."
            )
        return self


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f'Unable to find configuration file {configuration_file}')
    cfg_parser = configparser.ConfigParser()
    cfg_parser.read(configuration_file)
    return cfg_parser


def _get_configuration_value(section, name, value_type, config_parser, overrides, default):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is not None:
        return overrides.get(name)
    if not config_parser.has_option(section, name):
        return default
    if value_type is bool:
        return config_parser.getboolean(section, name)
    return config_parser.getfloat(section, name)


def configuration(config_parser, overrides) -> MapSettings:
    """
    Returns a validated MapSettings populated from the provided config parser,
    with values overriden with anything provided in 'overrides'.
    """
    try:
        settings = MapSettings(
            _get_configuration_value(constants.CANVAS_SECTION_NAME, 'canvas_width', float,
                                     config_parser, overrides, constants.DEFAULT_CANVAS_WIDTH),
            _get_configuration_value(constants.CANVAS_SECTION_NAME, 'padding', float,
                                     config_parser, overrides, constants.DEFAULT_PADDING),
            _get_configuration_value(constants.DATA_SECTION_NAME, 'skip_unsupported', bool,
                                     config_parser, overrides, constants.DEFAULT_SKIP_UNSUPPORTED),
        )
    except configparser.Error as e:
        raise ValueError(f'Unable to read the configuration file: {e}') from e
    return settings.validate()


def settings_from_file(configuration_file=None, overrides=None) -> MapSettings:
    """
    Sin archivo, parte de los valores por defecto y aplica overrides.
    """
    overrides = overrides or {}
    if configuration_file is None:
        cfg_parser = configparser.ConfigParser()
    else:
        cfg_parser = config_parser_factory(configuration_file)
    return configuration(cfg_parser, overrides)
