"""Command line definitions for vsphere_helper"""
import logging
import socket
import ssl
import sys

from pyVmomi import vmodl

from . import clone, inventory, locator, power, session, settings, tasks
from .errors import ConnectionFailure, ConnectionTimeout, \
    VSphereHelperError
from .params import TASK_ID, arg_setup

log = logging.getLogger(__name__)


def setup_logging(debug):
    logging.basicConfig(format='%(levelname)s:%(message)s',
                        level=logging.DEBUG if debug else logging.WARNING)


def run_inventory(si, cfg):
    inventory.dump_inventory(si, cfg.get('file'), cfg.get('format', 'json'))


def run_clone(si, cfg):
    clone.clone(si, cfg)


def run_status(si, cfg):
    entity = cfg['entity']
    if TASK_ID.match(entity):
        tasks.report_task_status(si, entity)
    else:
        vm = locator.get_vm_failfast(si, moid=entity,
                                     cluster=cfg.get('cluster'),
                                     pool=cfg.get('resourcepool'))
        power.print_vm_status(vm)


def confirm_destroy(cfg, vm, ask=None):
    if cfg.get('silent'):
        return True
    ask = ask or input
    answer = ask("Do you really want to destroy %s ? [yes/no] " % vm.name)
    return answer.strip() == 'yes'


def run_operation(si, cfg):
    vm = locator.get_vm_failfast(si, moid=cfg['entity'],
                                 cluster=cfg.get('cluster'),
                                 pool=cfg.get('resourcepool'))
    if cfg['operation'] == power.DESTROY and not confirm_destroy(cfg, vm):
        print("Not destroying %s" % vm.name)
        return
    power.change_power_state(si, vm, cfg['operation'])


def run_ticket(si, cfg):
    print(power.acquire_clone_ticket(si))


COMMANDS = {
    'inventory': run_inventory,
    'clone': run_clone,
    'status': run_status,
    'operation': run_operation,
    'ticket': run_ticket,
}


def main(argv=None):
    args = arg_setup(argv)
    kwargs = vars(args)

    setup_logging(bool(kwargs.get('debug')))

    cfg = {}
    try:
        cfg = settings.get_configs(kwargs)
        if cfg.get('debug'):
            logging.getLogger().setLevel(logging.DEBUG)
        settings.ensure_password(cfg)

        log.debug("Running task %s", cfg['mode'])

        # choose your adventure
        with session.connect(cfg) as si:
            COMMANDS[cfg['mode']](si, cfg)
    except VSphereHelperError as e:
        print("Error: %s" % e, file=sys.stderr)
        return 1
    except vmodl.MethodFault as e:
        print("Error: %s" % (e.msg or type(e).__name__), file=sys.stderr)
        return 1
    except socket.timeout:
        print("Error: %s" % ConnectionTimeout(
            "Timed out waiting for vCenter Server at %s."
            % cfg.get('server')), file=sys.stderr)
        return 1
    except (socket.error, ssl.SSLError) as e:
        print("Error: %s" % ConnectionFailure(
            "Lost connection to vCenter Server at %s: %s"
            % (cfg.get('server'), e)), file=sys.stderr)
        return 1
    return 0


def cli():
    sys.exit(main())


if __name__ == '__main__':
    cli()
