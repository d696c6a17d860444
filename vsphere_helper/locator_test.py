import unittest

from pyVmomi import vim

from vsphere_helper import locator
from vsphere_helper import moref as mo
from vsphere_helper.errors import ObjectNotFound
from vsphere_helper.fake_vim import FakeManagedObject, Inventory, folder, \
    virtual_machine


class TestExhaustiveLookup(unittest.TestCase):

    def setUp(self):
        self.inv = Inventory()
        self.session = self.inv.session()

    def test_find_by_name(self):
        vm = locator.find_vm(self.session, name='template01')
        self.assertIs(self.inv.template, vm)

    def test_find_by_moid(self):
        vm = locator.find_vm(self.session, moid='vm-101')
        self.assertIs(self.inv.template, vm)

    def test_missing_vm(self):
        self.assertIsNone(locator.find_vm(self.session, name='host1'))
        self.assertIsNone(locator.find_vm(self.session, moid='vm-999'))

    def test_descends_into_vapps_and_nested_folders(self):
        web = virtual_machine('vm-205', 'web01')
        vapp = FakeManagedObject('VirtualApp', 'resgroup-v60', 'shop',
                                 vm=[web])
        self.inv.vms2.childEntity.append(folder('group-v61', 'prod', [vapp]))
        self.assertIs(web, locator.find_vm(self.session, name='web01'))

    def test_datacenters_in_folders(self):
        self.inv.root.childEntity = [
            folder('group-d9', 'EMEA', [self.inv.dc1]), self.inv.dc2]
        names = [dc.name for dc in locator.iter_datacenters(self.inv.root)]
        self.assertEqual(['DC1', 'DC2'], names)


class TestScopedLookup(unittest.TestCase):

    def setUp(self):
        self.inv = Inventory()
        self.session = self.inv.session()

    def test_vm_in_child_pool(self):
        vm = locator.find_vm_in_pool(self.session, 'vm-101', 'domain-c7',
                                     'resgroup-21')
        self.assertIs(self.inv.template, vm)

    def test_vm_in_default_pool(self):
        db = virtual_machine('vm-150', 'db01')
        self.inv.pool2.vm.append(db)
        vm = locator.find_vm_in_pool(self.session, 'vm-150', 'domain-c27',
                                     'resgroup-28')
        self.assertIs(db, vm)

    def test_vm_not_in_pool(self):
        self.assertIsNone(locator.find_vm_in_pool(
            self.session, 'vm-101', 'domain-c7', 'resgroup-8'))

    def test_missing_cluster(self):
        self.assertRaises(ObjectNotFound, locator.find_vm_in_pool,
                          self.session, 'vm-101', 'domain-c99', 'resgroup-8')

    def test_missing_pool(self):
        self.assertRaises(ObjectNotFound, locator.find_vm_in_pool,
                          self.session, 'vm-101', 'domain-c7', 'resgroup-99')

    def test_pool_of_other_cluster(self):
        self.assertRaises(ObjectNotFound, locator.find_vm_in_pool,
                          self.session, 'vm-101', 'domain-c7', 'resgroup-41')

    def test_lookups_agree(self):
        exhaustive = locator.find_vm(self.session, moid='vm-101')
        scoped = locator.find_vm_in_pool(self.session, 'vm-101', 'domain-c7',
                                         'resgroup-21')
        self.assertEqual(mo.moref(exhaustive), mo.moref(scoped))
        self.assertEqual(mo.MoRef('VirtualMachine', 'vm-101'),
                         mo.moref(scoped))


class TestFailfast(unittest.TestCase):

    def setUp(self):
        self.inv = Inventory()
        self.session = self.inv.session()

    def test_exhaustive_without_scope(self):
        vm = locator.get_vm_failfast(self.session, moid='vm-101')
        self.assertIs(self.inv.template, vm)

    def test_scoped_with_cluster_and_pool(self):
        vm = locator.get_vm_failfast(self.session, moid='vm-101',
                                     cluster='domain-c7', pool='resgroup-21')
        self.assertIs(self.inv.template, vm)

    def test_not_found(self):
        with self.assertRaises(ObjectNotFound) as cm:
            locator.get_vm_failfast(self.session, name='nope',
                                    vm_term='Source VM')
        self.assertEqual("Source VM 'nope' does not exist",
                         str(cm.exception))


class TestContainerLookups(unittest.TestCase):

    def setUp(self):
        self.inv = Inventory()
        self.session = self.inv.session()

    def test_get_obj_by_name_and_moid(self):
        self.assertIs(self.inv.net1, locator.get_obj(
            self.session, [vim.Network], 'VM Network'))
        self.assertIs(self.inv.net2, locator.get_obj(
            self.session, [vim.Network], 'dvportgroup-33'))
        self.assertIs(self.inv.ds2, locator.get_obj(
            self.session, [vim.Datastore], 'ds2'))

    def test_get_obj_missing(self):
        self.assertIsNone(locator.get_obj(self.session, [vim.Datastore],
                                          'VM Network'))

    def test_get_obj_return_all(self):
        pools = locator.get_obj(self.session, [vim.ResourcePool],
                                'Resources', return_all=True)
        self.assertEqual([self.inv.pool1, self.inv.pool2], pools)

    def test_find_cluster_and_pool(self):
        cluster = locator.find_cluster(self.session, 'Cluster02')
        self.assertIs(self.inv.cluster2, cluster)
        self.assertIs(self.inv.pool2, locator.find_pool(cluster, 'Resources'))
        self.assertIs(self.inv.child2,
                      locator.find_pool(cluster, 'resgroup-41'))
        self.assertIsNone(locator.find_pool(cluster, 'Linux Servers'))


if __name__ == '__main__':
    unittest.main()
