'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

parameterised class decorator

* allows use of square brackets for parameterisation of classes, eg DelayPipe[NotifyResponse, 4]
* caches classes so that when created from equivalent parameters, there is only one class
  and it can be compared with == and "is"
'''

import inspect


class Generic:
    def __init__(self, generic_class_factory):
        self.generic_class_factory = generic_class_factory
        self.class_cache = dict()
        self.__doc__ = generic_class_factory.__doc__
        self.__name__ = generic_class_factory.__name__

    def __getitem__(self, index):
        args = index if isinstance(index, tuple) else (index,)
        class_cache_key = self.make_class_cache_key(args)
        try:
            return self.class_cache[class_cache_key]
        except KeyError:
            pass
        except TypeError:
            # may be an unhashable key
            return self.generic_class_factory(*args)

        component_class = self.generic_class_factory(*args)
        self.class_cache[class_cache_key] = component_class
        return component_class

    def make_class_cache_key(self, args):
        '''uses inspect.signature to add any defaults and create a hashable object

        a wrong number of parameters fails here, before the factory is called
        '''
        factory_signature = inspect.signature(self.generic_class_factory)
        bound_args = factory_signature.bind(*args)
        bound_args.apply_defaults()
        return tuple(bound_args.arguments.items())
