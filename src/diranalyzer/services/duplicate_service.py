from typing import List, Tuple

from diranalyzer.core.models import DuplicateGroup


class DuplicateService:
    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: List[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.

        Args:
            groups (List[DuplicateGroup]): Duplicate groups to update.
            file_paths (List[str]): Paths to remove.

        Returns:
            List[DuplicateGroup]: New groups; the input groups are immutable and left as is.
        """
        to_remove = set(file_paths)
        updated_groups = []
        for group in groups:
            remaining = [path for path in group.files if path not in to_remove]
            if len(remaining) >= 2:
                updated_groups.append(DuplicateGroup(digest=group.digest, size=group.size, files=tuple(remaining)))
        return updated_groups

    @staticmethod
    def keep_only_one_file_per_group(groups: List[DuplicateGroup]) -> Tuple[List[str], List[DuplicateGroup]]:
        """
        Keeps the first file of every group and marks the rest for deletion.
        Returns:
            - List of file paths to be deleted
            - Updated list of duplicate groups
        """
        files_to_delete = []
        for group in groups:
            files_to_delete.extend(group.files[1:])

        updated_groups = DuplicateService.remove_files_from_groups(groups, files_to_delete)
        return files_to_delete, updated_groups

    @staticmethod
    def reclaimable_bytes(groups: List[DuplicateGroup], files_to_delete: List[str]) -> int:
        """Total size of the given files that belong to one of the groups."""
        delete_set = set(files_to_delete)
        total_bytes = 0
        for group in groups:
            total_bytes += group.size * sum(1 for path in group.files if path in delete_set)
        return total_bytes
