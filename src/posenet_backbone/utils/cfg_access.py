'''Config accessor with validation hooks.'''

# standard imports
import typing
# third-party imports
import omegaconf
# local imports
import posenet_backbone.alias as alias

class ConfigAccessError(Exception):
    '''Custom exception for config access errors.'''


class ConfigKeyError(ConfigAccessError):
    '''Exception for missing config keys.'''


class ConfigTypeError(ConfigAccessError):
    '''Exception for config type mismatches.'''


class ConfigAccess:
    '''
    Framework-agnostic config accessor.
    Works with dict-like configs (dict, OmegaConf containers, JSON, YAML).
    '''

    def __init__(
            self,
            config: alias.ConfigType,
        ) -> None:
        '''Initialize with a config mapping.'''

        self._config = self.from_omega(config)

    def get_option(
            self,
            *path: str,
            default: typing.Any = None
        ) -> typing.Any:
        '''
        Retrieve nested config value by path; Returns default if not found.
        '''

        node = self._config
        try:
            for key in path:
                node = node[key]
            return node
        except (KeyError, TypeError):
            return default

    def require_option(self, *path: str) -> typing.Any:
        '''Retrieve nested config value by path; raise if not found.'''

        node = self._config
        try:
            for key in path:
                node = node[key]
        except (KeyError, TypeError) as exc:
            raise ConfigKeyError(
                f'Missing config key: {".".join(path)}'
            ) from exc
        return node

    def get_section_as_dict(
            self,
            section: str
        ) -> alias.ConfigType:
        '''
        Retrieve a section and return as a dict.
        '''

        try:
            sec = self._config[section]
        except KeyError as exc:
            raise ConfigKeyError(f'Missing config section: {section}') from exc
        if not isinstance(sec, typing.Mapping):
            raise ConfigTypeError(f'Config section not a dict: {section}')
        return sec

    @staticmethod
    def from_omega(cfg: alias.ConfigType) -> alias.ConfigType:
        '''Convert OmegaConf.DictConfig to standard dict recursively.'''

        if isinstance(cfg, omegaconf.DictConfig):
            _cfg = omegaconf.OmegaConf.to_container(cfg, resolve=True)
            if not isinstance(_cfg, typing.Mapping):
                raise ConfigTypeError('Converted config is not a mapping/dict')
            return typing.cast(alias.ConfigType, _cfg)
        return cfg
