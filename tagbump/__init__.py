"Compute the next semantic version tag from branch naming conventions."
