"""
Command Section: clone
Clone a VM into a new VM with a customized identity and first NIC
"""
import logging
from pprint import pformat

from netaddr import AddrFormatError, IPAddress, IPNetwork
from pyVmomi import vim

from . import locator
from . import moref as mo
from .errors import ConfigError, InvalidParameter, NameCollision, \
    ObjectNotFound

log = logging.getLogger(__name__)

# config file keys of a `networks` entry, by the command line key they fill
NETWORK_KEYS = {
    'portgroup': 'portgroup',
    'subnetmask': 'subnet_mask',
    'gateway': 'gateway',
    'cluster': 'cluster',
    'resourcepool': 'resource_pool',
    'datastore': 'datastore',
}


def split_fqdn(fqdn):
    """('host1', 'example.com') for host1.example.com"""
    shortname, _, domain = fqdn.strip().partition('.')
    return shortname.lower(), domain or None


def parse_ip(ip_string):
    try:
        return IPNetwork(ip_string)
    except (AddrFormatError, ValueError, TypeError):
        raise InvalidParameter("'%s' is not a valid IP address" % ip_string)


def check_netmask(mask):
    try:
        valid = IPAddress(mask).is_netmask()
    except (AddrFormatError, ValueError, TypeError):
        valid = False
    if not valid:
        raise InvalidParameter("'%s' is not a valid subnet mask" % mask)
    return str(mask)


def configured_network(network):
    try:
        return IPNetwork(network)
    except (AddrFormatError, ValueError, TypeError):
        raise ConfigError(
            "networks: '%s' is not a valid network address" % network)


def ip_settings(config):
    """
    Network settings for the clone's first NIC.
    Values given on the command line win, then the `networks` entry of the
    config file the IP falls in, then a mask given in CIDR form on the IP.
    """
    ip_string = config['ip']
    ipnet = parse_ip(ip_string)
    settings = {'ip': str(ipnet.ip)}

    if '/' in str(ip_string):
        settings['subnet_mask'] = str(ipnet.netmask)

    for network, defaults in config.get('networks', {}).items():
        net = configured_network(network)
        if ipnet.ip in net:
            log.debug("%s is in configured network %s", ipnet.ip, network)
            for key, value in (defaults or {}).items():
                settings.setdefault(key, value)
            settings.setdefault('subnet_mask', str(net.netmask))
            break

    for cli_key, key in NETWORK_KEYS.items():
        if config.get(cli_key) is not None:
            settings[key] = config[cli_key]

    if settings.get('subnet_mask'):
        settings['subnet_mask'] = check_netmask(settings['subnet_mask'])

    gateway = settings.get('gateway')
    if gateway and settings.get('subnet_mask'):
        network = IPNetwork("%s/%s" % (settings['ip'],
                                       settings['subnet_mask']))
        try:
            in_network = IPAddress(gateway) in network
        except (AddrFormatError, ValueError):
            raise InvalidParameter(
                "'%s' is not a valid gateway address" % gateway)
        if not in_network:
            raise InvalidParameter(
                "Gateway %s is not in network %s" % (gateway, network.cidr))

    if not settings.get('portgroup'):
        raise InvalidParameter(
            "No port group given for %s and none configured for its "
            "network" % settings['ip'])

    return settings


def first_nic(vm):
    for device in vm.config.hardware.device:
        if isinstance(device, vim.vm.device.VirtualEthernetCard):
            return device
    return None


def nic_backing(portgroup):
    if mo.kind_of(portgroup) == mo.DV_PORTGROUP:
        port = vim.dvs.PortConnection()
        port.portgroupKey = portgroup.key
        port.switchUuid = portgroup.config.distributedVirtualSwitch.uuid
        backing = vim.vm.device.VirtualEthernetCard.\
            DistributedVirtualPortBackingInfo()
        backing.port = port
        return backing

    backing = vim.vm.device.VirtualEthernetCard.NetworkBackingInfo()
    backing.deviceName = portgroup.name
    backing.useAutoDetect = False
    return backing


def build_config_spec(source_vm, vcpu, vram, portgroup):
    """CPU and memory, plus the source's first NIC moved to portgroup"""
    nic = first_nic(source_vm)
    if nic is None:
        raise InvalidParameter(
            "Source VM %s has no network adapter" % source_vm.name)

    nic.backing = nic_backing(portgroup)
    if nic.connectable is None:
        nic.connectable = vim.vm.device.VirtualDevice.ConnectInfo()
    nic.connectable.connected = True
    nic.connectable.startConnected = True
    nic.connectable.allowGuestControl = True

    devspec = vim.vm.device.VirtualDeviceSpec()
    devspec.operation = vim.vm.device.VirtualDeviceSpec.Operation.edit
    devspec.device = nic

    vmconf = vim.vm.ConfigSpec()
    vmconf.numCPUs = vcpu
    vmconf.memoryMB = vram
    vmconf.deviceChange = [devspec]
    return vmconf


def get_customization_spec(session, name):
    manager = session.content.customizationSpecManager
    try:
        item = manager.GetCustomizationSpec(name=name)
    except vim.fault.NotFound:
        raise ObjectNotFound('Customization specification', name)
    return item.spec


def build_customization_spec(spec, fqdn, settings):
    """Fill a stored customization spec with the new identity and IP"""
    shortname, domain = split_fqdn(fqdn)

    if not spec.nicSettingMap:
        mapping = vim.vm.customization.AdapterMapping()
        mapping.adapter = vim.vm.customization.IPSettings()
        spec.nicSettingMap = [mapping]

    adapter = spec.nicSettingMap[0].adapter
    adapter.ip = vim.vm.customization.FixedIp()
    adapter.ip.ipAddress = settings['ip']
    if settings.get('subnet_mask'):
        adapter.subnetMask = str(settings['subnet_mask'])
    if settings.get('gateway'):
        adapter.gateway = [str(settings['gateway'])]

    identity = spec.identity
    if isinstance(identity, vim.vm.customization.LinuxPrep):
        identity.hostName = vim.vm.customization.FixedName()
        identity.hostName.name = shortname
        if domain:
            identity.domain = domain
    elif isinstance(identity, vim.vm.customization.Sysprep):
        identity.userData.computerName = vim.vm.customization.FixedName()
        identity.userData.computerName.name = shortname

    return spec


def build_relocate_spec(pool=None, datastore=None):
    relospec = vim.vm.RelocateSpec()
    if pool is not None:
        relospec.pool = pool
    if datastore is not None:
        relospec.datastore = datastore
    return relospec


def resolve_placement(session, settings):
    """Resource pool and datastore objects for the clone, either may be None"""
    pool = None
    cluster_name = settings.get('cluster')
    pool_name = settings.get('resource_pool')

    if cluster_name:
        cluster = locator.find_cluster(session, cluster_name)
        if cluster is None:
            raise ObjectNotFound('Cluster', cluster_name)
        if pool_name:
            pool = locator.find_pool(cluster, pool_name)
            if pool is None:
                raise ObjectNotFound('Resource pool', pool_name)
        else:
            # default resource pool of the target cluster
            pool = cluster.resourcePool
    elif pool_name:
        pool = locator.get_obj(session, [vim.ResourcePool], pool_name)
        if pool is None:
            raise ObjectNotFound('Resource pool', pool_name)

    datastore = None
    if settings.get('datastore'):
        datastore = locator.get_obj(session, [vim.Datastore],
                                    settings['datastore'])
        if datastore is None:
            raise ObjectNotFound('Datastore', settings['datastore'])

    return pool, datastore


def build_clone_spec(relospec, vmconf, customspec):
    clonespec = vim.vm.CloneSpec()
    clonespec.location = relospec
    clonespec.config = vmconf
    clonespec.customization = customspec
    clonespec.powerOn = True
    clonespec.template = False
    return clonespec


def clone(session, config):
    """
    Submit one clone of config['source'] named after config['fqdn'].
    Returns the clone task, or the clone spec with config['dry_run'].
    """
    shortname, _ = split_fqdn(config['fqdn'])

    if locator.find_vm(session, name=shortname) is not None:
        raise NameCollision(shortname)

    source_vm = locator.get_vm_failfast(session, name=config['source'],
                                        vm_term='Source VM')

    settings = ip_settings(config)

    portgroup = locator.get_obj(session, [vim.Network],
                                settings['portgroup'])
    if portgroup is None:
        raise ObjectNotFound('Port group', settings['portgroup'])

    print("Cloning %s to new host %s with %s vCPU and %sMB RAM..." % (
        config['source'], shortname, config['vcpu'], config['vram']))

    vmconf = build_config_spec(source_vm, config['vcpu'], config['vram'],
                               portgroup)
    customspec = build_customization_spec(
        get_customization_spec(session, config['cspec']),
        config['fqdn'],
        settings,
    )
    pool, datastore = resolve_placement(session, settings)
    clonespec = build_clone_spec(build_relocate_spec(pool, datastore),
                                 vmconf, customspec)

    log.debug("CloneSpec\n%s", pformat(clonespec))

    if config.get('dry_run'):
        print(clonespec)
        return clonespec

    task = source_vm.Clone(folder=source_vm.parent, name=shortname,
                           spec=clonespec)
    print("Initiated cloning. Task id: %s" % mo.moid_of(task))
    return task
