'''
MIT Licence: Copyright (c) 2025 Baya Systems <https://bayasystems.com>

Ladder implementation
======================

command line driver

    ladder-tb --list
    ladder-tb -v --run SmokeCmds --args 'context_n=4'
    ladder-tb --runall

exit status is 0 when every test run passed, 1 otherwise (including --list and
unknown tests)

each test gets a fresh device; by default the behavioural device, or any callable
named by --device module:attribute that takes the configuration and returns an
object with the verilated port names
'''

import argparse
import importlib
import sys

from . import suites  # noqa: F401  (registers the shipped tests)
from .behavioural import BehaviouralDevice
from .common import LadderException
from .config import Config
from .harness import PortHarness
from .log import Log
from .registry import default_registry


def make_parser():
    ap = argparse.ArgumentParser(prog = 'ladder-tb', description = 'Context table testbench driver')
    ap.add_argument('-v', dest = 'verbose', action = 'store_true', help = 'Verbose')
    ap.add_argument('--list', action = 'store_true', help = 'List testcases')
    ap.add_argument('--run', metavar = 'NAME', action = 'append', default = [], help = 'Run testcase')
    ap.add_argument('--runall', action = 'store_true', help = 'Run all testcases')
    ap.add_argument('--args', default = '', help = "Configuration overrides, eg 'context_n=4,entries_n=8'")
    ap.add_argument('--device', default = None, help = 'Device factory as module:attribute')
    return ap


def load_device_factory(factory_name):
    if factory_name is None:
        return BehaviouralDevice
    module_name,_,attr_name = factory_name.partition(':')
    LadderException.insist(attr_name, f'device factory must be module:attribute, not {factory_name}')
    try:
        return getattr(importlib.import_module(module_name), attr_name)
    except (ImportError, AttributeError) as exc:
        raise LadderException(f'cannot load device factory {factory_name}: {exc}') from exc


class Driver:
    def __init__(self, args, registry = default_registry, stdout = None):
        self.args = args
        self.registry = registry
        self.stdout = stdout or sys.stdout
        self.log = Log()
        if args.verbose:
            self.log.set_verbose(self.stdout)

    def execute(self):
        args = self.args
        if args.list:
            for builder in self.registry.tests():
                print(builder.name, file = self.stdout)
            return 1

        config = Config.parse_args(args.args)
        device_factory = load_device_factory(args.device)

        if args.runall:
            builders = self.registry.tests()
        else:
            builders = []
            for name in args.run:
                builder = self.registry.get(name)
                if builder is None:
                    print(f'Unknown test: {name}', file = self.stdout)
                    return 1
                builders.append(builder)

        if not builders:
            print('Nothing to run (use --run NAME or --runall)', file = self.stdout)
            return 1

        for builder in builders:
            if not self.run(builder, config, device_factory):
                return 1
        return 0

    def run(self, builder, config, device_factory):
        harness = PortHarness(device_factory(config), config)
        test = builder.construct(config, self.log)
        try:
            passed = test.run(harness)
        except LadderException as exc:
            print(f'=============== {builder.name} ABORTED: {exc}', file = self.stdout)
            return False
        finally:
            harness.close()
        print(f'=============== {builder.name} {"PASS" if passed else "FAIL"}', file = self.stdout)
        return passed


def main(argv = None):
    args = make_parser().parse_args(argv)
    driver = Driver(args)
    try:
        return driver.execute()
    except LadderException as exc:
        print(f'Error: {exc}', file = driver.stdout)
        return 1
    finally:
        driver.log.close()


if __name__ == '__main__':
    sys.exit(main())
