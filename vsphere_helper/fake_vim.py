"""In-memory stand-ins for vCenter managed objects, used by the tests"""
from types import SimpleNamespace
from unittest import mock


class FakeManagedObject(object):
    """
    Carries what the code reads off a pyVmomi managed object: the type
    name, the MOID, a name and whatever properties are passed in.
    kinds lists supertypes a container view should match it on.
    """

    def __init__(self, kind, moid, name=None, kinds=(), **props):
        self._wsdlName = kind
        self._moId = moid
        self._kinds = (kind,) + tuple(kinds)
        self.name = moid if name is None else name
        for key, value in props.items():
            setattr(self, key, value)

    def __repr__(self):
        return "'vim.%s:%s'" % (self._wsdlName, self._moId)


def folder(moid, name, children=()):
    return FakeManagedObject('Folder', moid, name,
                             childEntity=list(children))


def datacenter(moid, name, host_folder, vm_folder=None):
    if vm_folder is None:
        vm_folder = folder('group-v-' + moid, 'vm')
    return FakeManagedObject('Datacenter', moid, name,
                             hostFolder=host_folder, vmFolder=vm_folder)


def resource_pool(moid, name, children=(), vms=()):
    return FakeManagedObject('ResourcePool', moid, name,
                             resourcePool=list(children), vm=list(vms))


def cluster(moid, name, default_pool, datastores=(), networks=()):
    return FakeManagedObject('ClusterComputeResource', moid, name,
                             kinds=('ComputeResource',),
                             resourcePool=default_pool,
                             datastore=list(datastores),
                             network=list(networks))


def datastore(moid, name):
    return FakeManagedObject('Datastore', moid, name)


def network(moid, name):
    return FakeManagedObject('Network', moid, name)


def dv_portgroup(moid, name, key, switch_uuid):
    config = SimpleNamespace(
        distributedVirtualSwitch=SimpleNamespace(uuid=switch_uuid))
    return FakeManagedObject('DistributedVirtualPortgroup', moid, name,
                             kinds=('Network',), key=key, config=config)


def task(moid, state, **info):
    info.setdefault('progress', None)
    info.setdefault('description', None)
    info.setdefault('result', None)
    info.setdefault('error', None)
    info.setdefault('startTime', None)
    info.setdefault('completeTime', None)
    return FakeManagedObject('Task', moid, moid,
                             info=SimpleNamespace(state=state, **info))


def virtual_machine(moid, name, power_state='poweredOn',
                    tools='guestToolsRunning', devices=(), parent=None):
    vm = FakeManagedObject(
        'VirtualMachine', moid, name,
        parent=parent,
        runtime=SimpleNamespace(powerState=power_state),
        guestHeartbeatStatus='green',
        guest=SimpleNamespace(guestFullName='CentOS 7 (64-bit)',
                              toolsRunningStatus=tools,
                              toolsStatus='toolsOk'),
        config=SimpleNamespace(
            hardware=SimpleNamespace(device=list(devices))),
    )
    vm.PowerOn = mock.Mock(return_value=task('task-201', 'queued'))
    vm.PowerOff = mock.Mock(return_value=task('task-202', 'queued'))
    vm.ShutdownGuest = mock.Mock(return_value=None)
    vm.RebootGuest = mock.Mock(return_value=None)
    vm.Destroy = mock.Mock(return_value=task('task-203', 'queued'))
    vm.Clone = mock.Mock(return_value=task('task-301', 'queued'))
    return vm


class FakeViewManager(object):
    def __init__(self, objects):
        self.objects = list(objects)

    def CreateContainerView(self, container, type, recursive):
        names = [t._wsdlName for t in type]
        view = [o for o in self.objects
                if any(n in o._kinds for n in names)]
        return SimpleNamespace(view=view, Destroy=mock.Mock())


class FakeSession(object):
    def __init__(self, root_folder, objects=(), spec_info=(),
                 recent_tasks=()):
        spec_manager = FakeManagedObject(
            'CustomizationSpecManager', 'CustomizationSpecManager',
            info=list(spec_info))
        spec_manager.GetCustomizationSpec = mock.Mock()
        self.content = SimpleNamespace(
            rootFolder=root_folder,
            viewManager=FakeViewManager(objects),
            customizationSpecManager=spec_manager,
            taskManager=SimpleNamespace(recentTask=list(recent_tasks)),
            sessionManager=SimpleNamespace(
                AcquireCloneTicket=mock.Mock(return_value='cst-VCT-52c3')),
            propertyCollector=mock.Mock(),
        )
        self.si = mock.Mock()

    @property
    def root_folder(self):
        return self.content.rootFolder


def spec_info(name, type):
    return SimpleNamespace(name=name, type=type)


class Inventory(object):
    """
    Two datacenters, each with one cluster whose default pool has one child
    pool, plus one datastore and one network.
    dc1 keeps template01 (vm-101) in a VM subfolder and in its child pool.
    """

    def __init__(self, nics=()):
        self.ds1 = datastore('datastore-11', 'ds1')
        self.net1 = network('network-13', 'VM Network')
        self.child1 = resource_pool('resgroup-21', 'Linux Servers')
        self.pool1 = resource_pool('resgroup-8', 'Resources', [self.child1])
        self.cluster1 = cluster('domain-c7', 'Cluster01', self.pool1,
                                [self.ds1], [self.net1])
        self.hosts1 = folder('group-h4', 'host', [self.cluster1])
        self.vms1 = folder('group-v3', 'vm')
        self.dc1 = datacenter('datacenter-2', 'DC1', self.hosts1, self.vms1)

        self.ds2 = datastore('datastore-31', 'ds2')
        self.net2 = dv_portgroup('dvportgroup-33', 'dvPG-Prod',
                                 'dvportgroup-33', '50 2a 7f')
        self.child2 = resource_pool('resgroup-41', 'Windows Servers')
        self.pool2 = resource_pool('resgroup-28', 'Resources', [self.child2])
        self.cluster2 = cluster('domain-c27', 'Cluster02', self.pool2,
                                [self.ds2], [self.net2])
        self.hosts2 = folder('group-h24', 'host', [self.cluster2])
        self.vms2 = folder('group-v23', 'vm')
        self.dc2 = datacenter('datacenter-22', 'DC2', self.hosts2, self.vms2)

        self.root = folder('group-d1', 'Datacenters', [self.dc1, self.dc2])

        self.template = virtual_machine('vm-101', 'template01',
                                        power_state='poweredOff',
                                        devices=list(nics),
                                        parent=None)
        templates = folder('group-v50', 'Templates', [self.template])
        self.template.parent = templates
        self.vms1.childEntity.append(templates)
        self.child1.vm.append(self.template)

    def objects(self):
        return [self.root, self.dc1, self.dc2, self.hosts1, self.hosts2,
                self.cluster1, self.cluster2, self.pool1, self.pool2,
                self.child1, self.child2, self.ds1, self.ds2, self.net1,
                self.net2, self.template]

    def session(self, spec_info=(), recent_tasks=()):
        return FakeSession(self.root, self.objects(), spec_info,
                           recent_tasks)
