"""VM status, power operations, destroy and clone tickets"""
import json
import logging

from pyVmomi import vim

from . import moref as mo
from .errors import GuestToolsNotRunning, InvalidParameter
from .tasks import report_task_status, wait_for_tasks

log = logging.getLogger(__name__)

POWER_ON = 'power-on'
POWER_OFF = 'power-off'
SHUTDOWN_GUEST = 'shutdown-guest'
REBOOT_GUEST = 'reboot-guest'
DESTROY = 'destroy'

OPERATIONS = (POWER_ON, POWER_OFF, SHUTDOWN_GUEST, REBOOT_GUEST, DESTROY)


def vm_status(vm):
    guest = vm.guest
    return {
        'name': vm.name,
        'powerState': str(vm.runtime.powerState),
        'guestHeartbeatStatus': str(vm.guestHeartbeatStatus),
        'guestFullName': guest.guestFullName,
        'toolsRunningStatus': guest.toolsRunningStatus,
        'toolsStatus': str(guest.toolsStatus),
    }


def print_vm_status(vm):
    status = vm_status(vm)
    print(json.dumps(status, indent=2))
    return status


def guest_tools_running(vm):
    """simple helper to avoid potential typos on the string comparison"""
    return 'guestToolsRunning' == vm.guest.toolsRunningStatus


def is_powered_on(vm):
    return vm.runtime.powerState == vim.VirtualMachinePowerState.poweredOn


def is_powered_off(vm):
    return vm.runtime.powerState == vim.VirtualMachinePowerState.poweredOff


def power_on(session, vm):
    if is_powered_on(vm):
        print("%s already poweredOn" % vm.name)
        return None
    task = vm.PowerOn()
    return report_task_status(session, mo.moid_of(task))


def power_off(session, vm):
    if is_powered_off(vm):
        print("%s already poweredOff" % vm.name)
        return None
    task = vm.PowerOff()
    return report_task_status(session, mo.moid_of(task))


def shutdown_guest(session, vm):
    """
    Shutdown guest
    fallback to power off if guest tools aren't running
    """
    if is_powered_off(vm):
        print("%s already poweredOff" % vm.name)
        return None
    if not guest_tools_running(vm):
        print("GuestTools not running or not installed: will powerOff")
        return power_off(session, vm)
    vm.ShutdownGuest()
    print("Guest shutdown requested for %s" % vm.name)
    return None


def reboot_guest(session, vm):
    if not guest_tools_running(vm):
        raise GuestToolsNotRunning(
            "GuestTools not running or not installed on %s: "
            "cannot reboot guest" % vm.name)
    vm.RebootGuest()
    print("Guest reboot requested for %s" % vm.name)
    return None


def destroy(session, vm):
    """Power the VM off and wait for that, then submit the destroy"""
    if is_powered_on(vm):
        log.debug("Powering off %s before destroying it", vm.name)
        wait_for_tasks(session, [vm.PowerOff()])

    print("Destroying %s..." % vm.name)
    task = vm.Destroy()
    return report_task_status(session, mo.moid_of(task))


POWER_OPERATIONS = {
    POWER_ON: power_on,
    POWER_OFF: power_off,
    SHUTDOWN_GUEST: shutdown_guest,
    REBOOT_GUEST: reboot_guest,
    DESTROY: destroy,
}


def change_power_state(session, vm, operation):
    try:
        handler = POWER_OPERATIONS[operation]
    except KeyError:
        raise InvalidParameter("Unknown operation '%s'" % operation)
    return handler(session, vm)


def acquire_clone_ticket(session):
    return session.content.sessionManager.AcquireCloneTicket()
