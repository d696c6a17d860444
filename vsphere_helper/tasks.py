"""
Task status

vCenter only keeps recently finished tasks in taskManager.recentTask, so a
task id can age out and become unknown. Status is read once per call;
nothing here polls except wait_for_tasks.
"""
import logging

from pyVmomi import vim, vmodl

from . import moref as mo
from .errors import UnknownTaskId

log = logging.getLogger(__name__)

QUEUED = 'queued'
RUNNING = 'running'
SUCCESS = 'success'
ERROR = 'error'


def find_task(session, task_id):
    for task in session.content.taskManager.recentTask:
        if mo.moid_of(task) == task_id:
            return task
    raise UnknownTaskId(task_id)


def error_message(error):
    if error is None:
        return None
    message = getattr(error, 'localizedMessage', None)
    if not message:
        message = getattr(error, 'msg', None)
    return message


def classify(info):
    """The fields reported for a task in its current state"""
    state = str(info.state)
    status = {'state': state}

    if state == RUNNING:
        status['progress'] = info.progress
        description = info.description
        status['message'] = description.message if description else None
        status['start_time'] = info.startTime
    elif state == SUCCESS:
        result = info.result
        if result is not None and hasattr(result, '_moId'):
            status['result_kind'] = mo.kind_of(result)
            status['result_name'] = result.name
            status['result_moid'] = mo.moid_of(result)
        status['start_time'] = info.startTime
        status['complete_time'] = info.completeTime
    elif state == ERROR:
        status['message'] = error_message(info.error)
        status['start_time'] = info.startTime
        status['complete_time'] = info.completeTime

    return status


def task_status(session, task_id):
    return classify(find_task(session, task_id).info)


def format_status(status):
    state = status['state']

    if state == RUNNING:
        return ("State: %s, Progress: %s%% complete, Current step: %s, "
                "Start time: %s" % (state, status['progress'],
                                    status['message'], status['start_time']))
    if state == SUCCESS:
        parts = ["State: %s" % state]
        if status.get('result_kind') == mo.VIRTUAL_MACHINE:
            parts.append("VM: %s, vmid: %s" % (status['result_name'],
                                               status['result_moid']))
        elif 'result_moid' in status:
            parts.append("Result: %s (%s)" % (status['result_name'],
                                              status['result_moid']))
        parts.append("Start time: %s, Complete time: %s" % (
            status['start_time'], status['complete_time']))
        return ", ".join(parts)
    if state == ERROR:
        return ("State: %s, Message: %s, Start time: %s, Complete time: %s"
                % (state, status['message'], status['start_time'],
                   status['complete_time']))
    return "State: %s" % state


def report_task_status(session, task_id):
    """Print one status line; an unknown id is reported, not raised"""
    try:
        status = task_status(session, task_id)
    except UnknownTaskId as e:
        print(e)
        return None
    print(format_status(status))
    return status


def wait_for_tasks(session, tasks):
    """
    Returns after all the tasks are complete.
    A task that ends in error raises its fault.
    """
    pc = session.content.propertyCollector

    task_list = [mo.moid_of(task) for task in tasks]

    obj_specs = [vmodl.query.PropertyCollector.ObjectSpec(obj=task)
                 for task in tasks]
    prop_spec = vmodl.query.PropertyCollector.PropertySpec(
        type=vim.Task, pathSet=[], all=True)
    filter_spec = vmodl.query.PropertyCollector.FilterSpec()
    filter_spec.objectSet = obj_specs
    filter_spec.propSet = [prop_spec]
    pc_filter = pc.CreateFilter(filter_spec, True)
    log.debug("Waiting for %s", ", ".join(task_list))

    try:
        version, state = None, None

        # loop looking for updates till every task reaches a final state
        while task_list:
            update = pc.WaitForUpdates(version)
            for filter_set in update.filterSet:
                for obj_set in filter_set.objectSet:
                    task = obj_set.obj
                    for change in obj_set.changeSet:
                        if change.name == 'info':
                            state = change.val.state
                        elif change.name == 'info.state':
                            state = change.val
                        else:
                            continue

                        if state == vim.TaskInfo.State.success:
                            if mo.moid_of(task) in task_list:
                                task_list.remove(mo.moid_of(task))
                        elif state == vim.TaskInfo.State.error:
                            raise task.info.error
            version = update.version
    finally:
        if pc_filter:
            pc_filter.Destroy()
