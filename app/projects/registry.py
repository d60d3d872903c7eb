"""
Project Registry - Centralized configuration for all projects in the hub.

To add a new project:
1. Create the project directory and files
2. Register the blueprint in app/__init__.py
3. Add an entry to PROJECTS list below

Project Types:
- 'project': Standalone project that appears on homepage
- 'category': Group of projects that links to a listing page

For projects that belong to a category, add 'parent' field with category ID.
"""

PROJECTS = [
    {
        'id': 'simple_games',
        'name': 'Simple Games',
        'description': 'Basic versions of some classic games',
        'url': '/games',
        'status': 'active',
        'type': 'category',
        'icon': '🎮',
        'order': 1
    },
    {
        'id': 'tic_tac_toe',
        'name': 'Tic-Tac-Toe',
        'description': 'Three in a row, with a history you can step back through',
        'url': '/tic-tac-toe',
        'status': 'active',
        'type': 'project',
        'parent': 'simple_games',
        'order': 101  # Sub-order within parent
    },
]


def get_all_projects():
    """
    Get all projects from the registry.
    
    Returns:
        list: List of all projects sorted by order
    """
    return sorted(PROJECTS, key=lambda x: x['order'])


def get_project_by_id(project_id):
    """
    Get a specific project by its ID.
    
    Args:
        project_id (str): The project ID to look up
        
    Returns:
        dict: Project data or None if not found
    """
    return next((p for p in PROJECTS if p['id'] == project_id), None)


def get_homepage_items():
    """
    Get items to display on the homepage (projects and categories, but not child projects).
    
    Returns:
        list: Items with 'available' flag set from their status
    """
    items = []
    for project in get_all_projects():
        # Skip projects that have a parent (they're shown in category pages)
        if project.get('parent'):
            continue
            
        project_copy = project.copy()
        project_copy['available'] = project['status'] == 'active'
        items.append(project_copy)
    
    return items


def get_children_of_category(category_id):
    """
    Get all child projects belonging to a specific category.
    
    Args:
        category_id (str): The category ID
        
    Returns:
        list: Child projects with 'available' flag set
    """
    children = []
    for project in get_all_projects():
        if project.get('parent') != category_id:
            continue
        project_copy = project.copy()
        project_copy['available'] = project['status'] == 'active'
        children.append(project_copy)
    
    return children
