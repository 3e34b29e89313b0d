import asyncio
import dataclasses
from typing import List

import kgeneric


@dataclasses.dataclass
class Container:
    name: str = ''
    image: str = ''


@dataclasses.dataclass
class PodSpec:
    node_name: str = ''
    containers: List[Container] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class PodStatus:
    phase: str = ''
    pod_ip: str = dataclasses.field(default='', metadata={'name': 'podIP'})


@dataclasses.dataclass
class Pod(kgeneric.Object):
    api_version: str = 'v1'
    kind: str = 'Pod'
    spec: PodSpec = dataclasses.field(default_factory=PodSpec)
    status: PodStatus = dataclasses.field(default_factory=PodStatus)


async def main() -> None:
    kgeneric.configure(verbose=True)
    async with kgeneric.Client.from_connection(kgeneric.login()) as client:
        pod = Pod(metadata=kgeneric.ObjectMeta(namespace='kube-system', name='kube-apiserver'))
        try:
            await client.get(pod)
        except kgeneric.APINotFoundError as e:
            print(f"Not found: {e}")
            return
        print(f"{pod.metadata.name} is {pod.status.phase} at {pod.status.pod_ip} on {pod.spec.node_name}")
        for container in pod.spec.containers:
            print(f"  {container.name}: {container.image}")


if __name__ == '__main__':
    asyncio.run(main())
