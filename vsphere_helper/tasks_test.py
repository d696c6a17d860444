import datetime
import io
import unittest
from types import SimpleNamespace
from unittest import mock

from vsphere_helper import tasks
from vsphere_helper.errors import UnknownTaskId
from vsphere_helper.fake_vim import Inventory, task, virtual_machine

START = datetime.datetime(2026, 10, 18, 9, 30, 0)
COMPLETE = datetime.datetime(2026, 10, 18, 9, 34, 12)


def recent_tasks():
    return [
        task('task-1', 'queued'),
        task('task-2', 'running', progress=42, startTime=START,
             description=SimpleNamespace(message='Copying virtual disk')),
        task('task-3', 'success', startTime=START, completeTime=COMPLETE,
             result=virtual_machine('vm-120', 'host1')),
        task('task-4', 'error', startTime=START, completeTime=COMPLETE,
             error=SimpleNamespace(
                 localizedMessage='The name host1 already exists.',
                 msg='The name host1 already exists.')),
        task('task-5', 'success', startTime=START, completeTime=COMPLETE),
    ]


class TestClassify(unittest.TestCase):

    def setUp(self):
        self.session = Inventory().session(recent_tasks=recent_tasks())

    def test_queued(self):
        self.assertEqual({'state': 'queued'},
                         tasks.task_status(self.session, 'task-1'))

    def test_running(self):
        self.assertEqual({'state': 'running',
                          'progress': 42,
                          'message': 'Copying virtual disk',
                          'start_time': START},
                         tasks.task_status(self.session, 'task-2'))

    def test_success(self):
        self.assertEqual({'state': 'success',
                          'result_kind': 'VirtualMachine',
                          'result_name': 'host1',
                          'result_moid': 'vm-120',
                          'start_time': START,
                          'complete_time': COMPLETE},
                         tasks.task_status(self.session, 'task-3'))

    def test_success_without_result(self):
        self.assertEqual({'state': 'success',
                          'start_time': START,
                          'complete_time': COMPLETE},
                         tasks.task_status(self.session, 'task-5'))

    def test_error(self):
        status = tasks.task_status(self.session, 'task-4')
        self.assertEqual({'state': 'error',
                          'message': 'The name host1 already exists.',
                          'start_time': START,
                          'complete_time': COMPLETE}, status)
        self.assertNotIn('progress', status)

    def test_error_without_localized_message(self):
        info = SimpleNamespace(state='error', startTime=START,
                               completeTime=COMPLETE,
                               error=SimpleNamespace(localizedMessage=None,
                                                     msg='Fault'))
        self.assertEqual('Fault', tasks.classify(info)['message'])

    def test_unknown_task(self):
        self.assertRaises(UnknownTaskId, tasks.task_status, self.session,
                          'task-99')


class TestReport(unittest.TestCase):

    def setUp(self):
        self.session = Inventory().session(recent_tasks=recent_tasks())

    def report(self, task_id):
        out = io.StringIO()
        with mock.patch('sys.stdout', out):
            tasks.report_task_status(self.session, task_id)
        return out.getvalue()

    def test_lines(self):
        self.assertEqual("State: queued\n", self.report('task-1'))
        self.assertEqual(
            "State: running, Progress: 42% complete, Current step: Copying "
            "virtual disk, Start time: 2026-10-18 09:30:00\n",
            self.report('task-2'))
        self.assertEqual(
            "State: success, VM: host1, vmid: vm-120, Start time: "
            "2026-10-18 09:30:00, Complete time: 2026-10-18 09:34:12\n",
            self.report('task-3'))
        self.assertEqual(
            "State: error, Message: The name host1 already exists., Start "
            "time: 2026-10-18 09:30:00, Complete time: 2026-10-18 09:34:12\n",
            self.report('task-4'))

    def test_not_found_is_reported(self):
        self.assertEqual("No task 'task-99' found.\n",
                         self.report('task-99'))


class TestWaitForTasks(unittest.TestCase):

    def update(self, task_obj, state, version):
        change = SimpleNamespace(name='info.state', val=state)
        obj_set = SimpleNamespace(obj=task_obj, changeSet=[change])
        return SimpleNamespace(
            version=version,
            filterSet=[SimpleNamespace(objectSet=[obj_set])])

    def setUp(self):
        self.session = Inventory().session()
        self.pc = self.session.content.propertyCollector
        self.task = task('task-7', 'running')

    @mock.patch('vsphere_helper.tasks.vmodl')
    def test_returns_on_success(self, vmodl):
        self.pc.WaitForUpdates.side_effect = [
            self.update(self.task, 'running', '1'),
            self.update(self.task, 'success', '2'),
        ]
        tasks.wait_for_tasks(self.session, [self.task])
        self.assertEqual(2, self.pc.WaitForUpdates.call_count)
        self.pc.CreateFilter.return_value.Destroy.assert_called_once_with()

    @mock.patch('vsphere_helper.tasks.vmodl')
    def test_raises_task_error(self, vmodl):
        self.task.info.error = RuntimeError('disk busy')
        self.pc.WaitForUpdates.side_effect = [
            self.update(self.task, 'error', '1'),
        ]
        self.assertRaises(RuntimeError, tasks.wait_for_tasks, self.session,
                          [self.task])
        self.pc.CreateFilter.return_value.Destroy.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
