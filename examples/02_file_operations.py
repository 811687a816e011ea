"""
File operations - Write, rename, copy, archive, delete
"""
import asyncio
from pterapy import PanelClient, PanelConsistencyError


async def main():
    async with PanelClient("https://panel.example.com", "ptlc_your_api_key") as panel:
        server = await panel.get_server("1a2b3c4d")
        manager = await server.get_file_manager()
        
        # Write a file at an absolute path
        motd = await manager.write_file("Welcome!\n", "/motd.txt")
        print(f"Wrote: {motd.location}")
        
        # Every mutation returns a fresh snapshot
        motd = await motd.write("Welcome back!\n")
        renamed = await motd.rename("motd.old.txt")
        print(f"Renamed: {motd.location} -> {renamed.location}")
        
        # The old snapshot no longer matches the server
        try:
            await motd.sync()
        except PanelConsistencyError as e:
            print(f"Stale: {e}")
        
        # Create a directory, fill it, copy into it
        backups = await manager.add_directory("backups")
        await backups.write_child("kept by example", "README.txt")
        await renamed.duplicate("/backups")
        
        # Archive the directory, then extract and drop the archive
        archive = await backups.compress()
        print(f"Archive: {archive.location}")
        await archive.decompress(delete_self=True)
        
        await renamed.delete()


if __name__ == "__main__":
    asyncio.run(main())
