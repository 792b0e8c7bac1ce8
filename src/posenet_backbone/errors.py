'''Exceptions raised by the backbone core.'''

class BackboneError(Exception):
    '''Base exception for backbone construction and inference errors.'''


class InvalidConfiguration(BackboneError):
    '''Unsupported network variant, output stride or input resolution.'''


class UnknownVariant(InvalidConfiguration):
    '''Network-size selector is not one of the supported multipliers.'''


class UnknownConvolutionKind(BackboneError):
    '''Architecture table holds a convolution kind with no executor.'''


class MissingWeight(BackboneError, KeyError):
    '''Weight provider has no tensor under the requested key.'''

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'No weight tensor named: {self.key}'
