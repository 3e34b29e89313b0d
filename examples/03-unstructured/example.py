import asyncio

import kgeneric


async def main() -> None:
    settings = kgeneric.AccessSettings()
    settings.networking.error_backoffs = [1, 2, 5]
    info = kgeneric.login()
    async with kgeneric.Client.from_connection(info, settings=settings) as client:

        # Cluster-scoped kinds are listed with no namespace at all.
        nodes = {'apiVersion': 'v1', 'kind': 'NodeList'}
        await client.list(None, nodes, kgeneric.label_selector('kubernetes.io/os=linux'))
        for node in nodes['items']:
            print(f"Node: {node['metadata']['name']}")

        # A namespace for them is an error, not an empty list.
        try:
            await client.list('default', {'apiVersion': 'v1', 'kind': 'NodeList'})
        except kgeneric.ScopeMismatchError as e:
            print(f"As expected: {e}")


if __name__ == '__main__':
    asyncio.run(main())
