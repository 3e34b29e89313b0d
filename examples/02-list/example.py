import asyncio
import dataclasses
from typing import List, Optional

import kgeneric


@dataclasses.dataclass
class DeploymentSpec:
    replicas: Optional[int] = None


@dataclasses.dataclass
class Deployment(kgeneric.Object):
    api_version: str = 'apps/v1'
    kind: str = 'Deployment'
    spec: DeploymentSpec = dataclasses.field(default_factory=DeploymentSpec)


@dataclasses.dataclass
class DeploymentList(kgeneric.ObjectList):
    api_version: str = 'apps/v1'
    kind: str = 'DeploymentList'
    items: List[Deployment] = dataclasses.field(default_factory=list)


async def main() -> None:
    async with kgeneric.Client.from_connection(kgeneric.login()) as client:

        # Page through all deployments in all namespaces, 10 at a time.
        token = ''
        while True:
            deployments = DeploymentList()
            await client.list('', deployments, kgeneric.limit(10), kgeneric.continue_from(token))
            for deployment in deployments.items:
                print(f"{deployment.metadata.namespace}/{deployment.metadata.name}: "
                      f"{deployment.spec.replicas} replicas")
            token = deployments.metadata.continue_
            if not token:
                break


if __name__ == '__main__':
    asyncio.run(main())
