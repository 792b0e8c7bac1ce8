'''Base model interface'''

# standard imports
import abc
# local imports
import posenet_backbone.alias as alias

class BaseModel(metaclass=abc.ABCMeta):
    '''With minimal required methods.'''

    @abc.abstractmethod
    def predict(self, image: alias.ImageLike) -> alias.TensorDict:
        '''Named output maps for one (H, W, 3) image.'''

    @abc.abstractmethod
    def dispose(self) -> None:
        '''Release resources retained by the model.'''
