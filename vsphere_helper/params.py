"""Command line option definitions"""
import argparse
import re

from .power import OPERATIONS
from .version import __version__

TASK_ID = re.compile(r'^task-\d+$')
VM_ID = re.compile(r'^vm-\d+$')


def entity_id(value):
    """task-<digits> or vm-<digits>"""
    if TASK_ID.match(value) or VM_ID.match(value):
        return value
    raise argparse.ArgumentTypeError(
        "'%s' is not a task id (task-N) or a VM id (vm-N)" % value)


def vm_id(value):
    if VM_ID.match(value):
        return value
    raise argparse.ArgumentTypeError("'%s' is not a VM id (vm-N)" % value)


def build_parser():
    main_parser = argparse.ArgumentParser(
        prog="vsphere-helper",
        description="Inventory, clone, status and power tasks against "
                    "a vCenter server"
    )

    main_parser.add_argument(
        "--version",
        action="version",
        version="vsphere-helper version %s" % __version__
    )

    subparsers = main_parser.add_subparsers(help="Task", dest="mode")
    subparsers.required = True

    # specify any arguments that are common to all subcommands
    common_parser = argparse.ArgumentParser(
        add_help=False,
        description="Shared/common arguments for all subcommands"
    )
    common_parser.add_argument(
        "--server",
        type=str,
        help="vCenter Server hostname/IP address"
    )
    common_parser.add_argument(
        "--port",
        type=int,
        help="vCenter Server port (default 443)"
    )
    common_parser.add_argument(
        "--username",
        type=str,
        help="vCenter Server username"
    )
    common_parser.add_argument(
        "--password",
        type=str,
        help="vCenter Server password. Prompted for when not given here "
             "or in the config file."
    )
    common_parser.add_argument(
        "--insecure",
        dest="insecure",
        action="store_true",
        default=None,
        help="Skip server certificate verification (default)"
    )
    common_parser.add_argument(
        "--no-insecure",
        dest="insecure",
        action="store_false",
        help="Verify the server certificate"
    )
    common_parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Print debug messages"
    )

    # inventory
    inventory_parser = subparsers.add_parser(
        "inventory",
        parents=[common_parser],
        help="Dump the datacenter, cluster, resource pool, datastore, "
             "network and customization spec inventory"
    )
    inventory_parser.add_argument(
        "--file",
        type=str,
        help="File to write inventory information to (default: stdout)"
    )
    inventory_parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format"
    )

    # clone
    clone_parser = subparsers.add_parser(
        "clone",
        parents=[common_parser],
        help="Clone a VM to a new, customized VM"
    )
    clone_parser.add_argument(
        "--source",
        required=True,
        type=str,
        help="Name of the source VM"
    )
    clone_parser.add_argument(
        "--vcpu",
        required=True,
        type=int,
        help="Number of vCPUs"
    )
    clone_parser.add_argument(
        "--vram",
        required=True,
        type=int,
        help="vRAM in MB"
    )
    clone_parser.add_argument(
        "--portgroup",
        type=str,
        help="Port group in which to place the first NIC. Defaults to the "
             "one configured for the IP's network."
    )
    clone_parser.add_argument(
        "--cspec",
        required=True,
        type=str,
        help="Customization specification to apply"
    )
    clone_parser.add_argument(
        "--fqdn",
        required=True,
        type=str,
        help="FQDN of the VM; its first label names the new VM"
    )
    clone_parser.add_argument(
        "--ip",
        required=True,
        type=str,
        help="IP address of the first NIC, optionally in CIDR form"
    )
    clone_parser.add_argument(
        "--subnetmask",
        type=str,
        help="Subnet mask of the first NIC"
    )
    clone_parser.add_argument(
        "--gateway",
        type=str,
        help="Gateway of the first NIC"
    )
    clone_parser.add_argument(
        "--cluster",
        type=str,
        help="Cluster in which to place the VM (name or id)"
    )
    clone_parser.add_argument(
        "--resourcepool",
        type=str,
        help="Resource pool in which to place the VM (name or id). "
             "Defaults to the cluster's default pool."
    )
    clone_parser.add_argument(
        "--datastore",
        type=str,
        help="Datastore in which to place the VM (name or id)"
    )
    clone_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print the clone spec instead of submitting it"
    )

    # status
    status_parser = subparsers.add_parser(
        "status",
        parents=[common_parser],
        help="Report a recent task's state or a VM's status"
    )
    status_parser.add_argument(
        "--entity",
        required=True,
        type=entity_id,
        help="Managed object id of a task (task-N) or VM (vm-N)"
    )
    status_parser.add_argument(
        "--cluster",
        type=str,
        help="Cluster id of the VM, for a faster lookup"
    )
    status_parser.add_argument(
        "--resourcepool",
        type=str,
        help="Resource pool id of the VM, for a faster lookup"
    )

    # operation
    operation_parser = subparsers.add_parser(
        "operation",
        parents=[common_parser],
        help="Change a VM's power state, or destroy it"
    )
    operation_parser.add_argument(
        "--entity",
        required=True,
        type=vm_id,
        help="Managed object id of the VM (vm-N)"
    )
    operation_parser.add_argument(
        "--operation",
        required=True,
        choices=OPERATIONS,
        help="Operation to perform"
    )
    operation_parser.add_argument(
        "--cluster",
        type=str,
        help="Cluster id of the VM, for a faster lookup"
    )
    operation_parser.add_argument(
        "--resourcepool",
        type=str,
        help="Resource pool id of the VM, for a faster lookup"
    )
    operation_parser.add_argument(
        "--silent",
        help="Destroy without asking for confirmation",
        default=None,
        action="store_true"
    )

    # ticket
    subparsers.add_parser(
        "ticket",
        parents=[common_parser],
        help="Print a clone ticket for the session"
    )

    return main_parser


def arg_setup(argv=None):
    return build_parser().parse_args(argv)
