"""worklens - filtering, faceting and prioritization for task/issue/project lists."""
