"""
Rudimentary login into the cluster: from a service account or a kubeconfig.

The library is not a full-featured client, and avoids bringing too much logic
for proper authentication, especially all the complex auth-providers.
Only the static credentials are supported: tokens, client certificates,
and basic auth. Anything else can be obtained externally and passed
as :class:`ConnectionInfo` directly.

.. seealso::
    :mod:`kgeneric._cogs.structs.credentials`.
"""
import os
from typing import Any, Dict, Optional

import yaml

from kgeneric._cogs.structs import credentials

# As per https://kubernetes.io/docs/tasks/run-application/access-api-from-pod/
SERVICE_ACCOUNT_DIR = '/var/run/secrets/kubernetes.io/serviceaccount'


def login(
        *,
        context: Optional[str] = None,
) -> credentials.ConnectionInfo:
    """
    Get the credentials from the first available source, or fail.

    The in-cluster service account goes first, since the pods normally
    have no kubeconfigs. The kubeconfig goes second (e.g. for developers).
    An explicitly requested kubeconfig context disables the in-cluster login.
    """
    if context is None and has_service_account():
        info = login_with_service_account()
        if info is not None:
            return info
    if has_kubeconfig():
        info = login_with_kubeconfig(context=context)
        if info is not None:
            return info
    raise credentials.LoginError("Neither a service account nor a kubeconfig is available.")


def has_service_account() -> bool:
    return os.path.exists(os.path.join(SERVICE_ACCOUNT_DIR, 'token'))


def login_with_service_account() -> Optional[credentials.ConnectionInfo]:
    """
    A minimalistic login handler that can get raw data from a service account.

    No parsing or sophisticated multi-step token retrieval is performed.
    """
    token_path = os.path.join(SERVICE_ACCOUNT_DIR, 'token')
    ns_path = os.path.join(SERVICE_ACCOUNT_DIR, 'namespace')
    ca_path = os.path.join(SERVICE_ACCOUNT_DIR, 'ca.crt')

    if os.path.exists(token_path):
        with open(token_path, encoding='utf-8') as f:
            token = f.read().strip()

        namespace: Optional[str] = None
        if os.path.exists(ns_path):
            with open(ns_path, encoding='utf-8') as f:
                namespace = f.read().strip()

        return credentials.ConnectionInfo(
            server='https://kubernetes.default.svc',
            ca_path=ca_path if os.path.exists(ca_path) else None,
            token=token or None,
            default_namespace=namespace or None,
        )
    else:
        return None


def has_kubeconfig() -> bool:
    env_var_set = bool(os.environ.get('KUBECONFIG'))
    file_exists = os.path.exists(os.path.expanduser('~/.kube/config'))
    return env_var_set or file_exists


def login_with_kubeconfig(
        *,
        context: Optional[str] = None,
) -> Optional[credentials.ConnectionInfo]:
    """
    A minimalistic login handler that can get raw data from a kubeconfig file.

    Multiple files in ``$KUBECONFIG`` are merged: the first value wins.
    The current context of the files is used unless the context is explicit.
    """

    # As per https://kubernetes.io/docs/concepts/configuration/organize-cluster-access-kubeconfig/
    kubeconfig = os.environ.get('KUBECONFIG')
    if not kubeconfig and os.path.exists(os.path.expanduser('~/.kube/config')):
        kubeconfig = '~/.kube/config'
    if not kubeconfig:
        return None

    paths = [path.strip() for path in kubeconfig.split(os.pathsep)]
    paths = [os.path.expanduser(path) for path in paths if path]

    # As prescribed: if the file is absent or non-deserialisable, then fail. The first value wins.
    current_context: Optional[str] = None
    contexts: Dict[Any, Any] = {}
    clusters: Dict[Any, Any] = {}
    users: Dict[Any, Any] = {}
    for path in paths:

        with open(path, encoding='utf-8') as f:
            config = yaml.safe_load(f.read()) or {}

        if current_context is None:
            current_context = config.get('current-context')
        for item in config.get('contexts', []):
            if item['name'] not in contexts:
                contexts[item['name']] = item.get('context') or {}
        for item in config.get('clusters', []):
            if item['name'] not in clusters:
                clusters[item['name']] = item.get('cluster') or {}
        for item in config.get('users', []):
            if item['name'] not in users:
                users[item['name']] = item.get('user') or {}

    # Once fully parsed, use the requested or the current context only.
    context_name = context if context is not None else current_context
    if context_name is None:
        raise credentials.LoginError('Current context is not set in kubeconfigs.')
    if context_name not in contexts:
        raise credentials.LoginError(f'Context {context_name!r} is absent in kubeconfigs.')
    kubecontext = contexts[context_name]
    cluster = clusters.get(kubecontext.get('cluster'), {})
    user = users.get(kubecontext.get('user'), {})
    if not cluster.get('server'):
        raise credentials.LoginError(f'Context {context_name!r} has no cluster server.')

    # Unlike the full-featured clients, we do not make an API request to refresh the token.
    provider_token = user.get('auth-provider', {}).get('config', {}).get('access-token')

    # Map the retrieved fields into the credentials object.
    return credentials.ConnectionInfo(
        server=cluster.get('server'),
        ca_path=cluster.get('certificate-authority'),
        ca_data=cluster.get('certificate-authority-data'),
        insecure=cluster.get('insecure-skip-tls-verify'),
        certificate_path=user.get('client-certificate'),
        certificate_data=user.get('client-certificate-data'),
        private_key_path=user.get('client-key'),
        private_key_data=user.get('client-key-data'),
        username=user.get('username'),
        password=user.get('password'),
        token=user.get('token') or provider_token,
        default_namespace=kubecontext.get('namespace'),
    )
