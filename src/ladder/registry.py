'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

test registry

tests register themselves by name with the register decorator; the driver looks
them up here
'''


class TestBuilder:
    __test__ = False

    def __init__(self, test_class, name = None):
        self.test_class = test_class
        self.name = name or test_class.__name__

    def construct(self, config, log):
        return self.test_class(config, log)


class TestRegistry:
    __test__ = False

    def __init__(self):
        self.builders = {}

    def add(self, test_class, name = None):
        builder = TestBuilder(test_class, name)
        assert builder.name not in self.builders, f'test {builder.name} registered twice'
        self.builders[builder.name] = builder
        return builder

    def get(self, name):
        return self.builders.get(name, None)

    def tests(self):
        return list(self.builders.values())

    def __len__(self):
        return len(self.builders)


default_registry = TestRegistry()


def register(test_class = None, *, name = None, registry = None):
    '''class decorator adding a test to a registry (the default registry if none given)

        @register
        class SmokeCmds(Directed): ...

        @register(name = 'reset')
        class ResetTest(Directed): ...
    '''
    def decorate(cls):
        (default_registry if registry is None else registry).add(cls, name)
        return cls
    if test_class is None:
        return decorate
    return decorate(test_class)
