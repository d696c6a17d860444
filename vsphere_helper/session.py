"""vCenter session handling"""
import contextlib
import logging
import socket
import ssl

from pyVim.connect import SmartConnect, Disconnect
from pyVmomi import vim, vmodl

from .errors import AuthenticationFailure, ConnectionFailure, \
    ConnectionTimeout

log = logging.getLogger(__name__)


class Session(object):
    """
    A connected service instance.
    Every operation that talks to vCenter takes one of these explicitly.
    """

    def __init__(self, si):
        self.si = si
        self.content = si.RetrieveContent()

    @property
    def root_folder(self):
        return self.content.rootFolder

    def close(self):
        if self.si is None:
            return
        si, self.si = self.si, None
        try:
            Disconnect(si)
        except (vmodl.MethodFault, socket.error, ssl.SSLError) as e:
            log.warning("Error while disconnecting: %s", e)


def ssl_context(insecure):
    context = ssl.create_default_context()
    if insecure:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def open_session(server, username, password, port=443, insecure=True,
                 timeout=None):
    """Connect to vCenter server"""
    log.debug("Connecting to %s:%s as %s", server, port, username)
    try:
        si = SmartConnect(
            host=server,
            user=username,
            pwd=password,
            port=int(port),
            sslContext=ssl_context(insecure),
            httpConnectionTimeout=timeout,
        )
    except vim.fault.InvalidLogin:
        raise AuthenticationFailure(
            "Unable to login with provided credentials. "
            "Invalid username or password.")
    except socket.timeout:
        raise ConnectionTimeout(
            "Timed out while connecting to vCenter Server at %s." % server)
    except (socket.error, ssl.SSLError) as e:
        raise ConnectionFailure(
            "Unable to connect to vCenter Server at %s: %s" % (server, e))

    try:
        return Session(si)
    except Exception:
        # logged in but unusable
        Disconnect(si)
        raise


@contextlib.contextmanager
def connect(config):
    """Session scoped to a block, disconnected on every exit path"""
    session = open_session(
        config['server'],
        config['username'],
        config['password'],
        port=config.get('port', 443),
        insecure=config.get('insecure', True),
        timeout=config.get('timeout'),
    )
    try:
        yield session
    finally:
        log.debug("Disconnecting from %s", config['server'])
        session.close()
